#!/usr/bin/env python3
"""
Clipbite Feed API: entrypoint for uvicorn feed_server.server:app.

Run directly: python -m feed_server.server
"""

import uvicorn

from .app import app
from .config import get_config


def main() -> None:
    config = get_config()
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
