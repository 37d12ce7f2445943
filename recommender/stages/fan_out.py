"""
Chunked membership queries.

Splits a value list to the store's fan-out limit, issues one query_in per
chunk concurrently, and concatenates the results in chunk order.
"""

import asyncio
import logging
from typing import Any, Awaitable, Dict, List, Optional, Sequence

from ..interfaces import DocumentStore
from ..models.document import Document
from ..utils.batching import chunked

logger = logging.getLogger(__name__)


async def gather_all(*aws: Awaitable[Any]) -> List[Any]:
    """
    asyncio.gather that fails fast without leaving siblings behind.

    On the first failure the remaining tasks are cancelled and awaited, so
    their own errors are consumed, and the first failure is re-raised.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def query_in_chunks(
    store: DocumentStore,
    collection: str,
    field: str,
    values: Sequence[Any],
    chunk_size: int,
    filters: Optional[Dict[str, Any]] = None,
) -> List[Document]:
    """Run query_in over values in chunks of chunk_size; empty values issue no query."""
    chunks = chunked(values, chunk_size)
    if not chunks:
        return []
    logger.debug(
        "query_in %s.%s: %d values in %d chunks", collection, field, len(values), len(chunks)
    )
    results = await gather_all(
        *(store.query_in(collection, field, chunk, filters=filters) for chunk in chunks)
    )
    return [doc for docs in results for doc in docs]
