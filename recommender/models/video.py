"""
VideoRecord model: an uploaded video as stored.

Store documents use camelCase fields (uploaderId, fileName, uploadedAt);
from_document() maps them and applies defaults so later stages never
check for field presence.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..utils.time import to_datetime
from .document import Document
from .fields import count, text


class VideoRecord(BaseModel):
    """
    Video payload used by enrichment.

    media_ref: stored file name / path inside the media bucket.
    uploaded_at: None when the stored timestamp is missing or unparseable.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    uploader_id: str = ""
    caption: str = ""
    media_ref: str = ""
    uploaded_at: Optional[datetime] = None
    views: int = 0

    @classmethod
    def from_document(cls, doc: Document) -> "VideoRecord":
        return cls(
            id=doc.id,
            uploader_id=text(doc.get("uploaderId")),
            caption=text(doc.get("caption")),
            media_ref=text(doc.get("fileName")),
            uploaded_at=to_datetime(doc.get("uploadedAt")),
            views=count(doc.get("views")),
        )
