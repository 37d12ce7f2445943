"""
Document: the raw record shape returned by every document store.

Stores hand back an opaque id plus a loosely typed field map. Typed models
(Like, VideoRecord, UserProfile, Connection) are built from it at the
ingestion boundary via from_document().
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Pseudo field name that addresses the document id in queries
DOCUMENT_ID = "__name__"


@dataclass(frozen=True)
class Document:
    id: str
    data: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self.data.get(key, default)
