"""
Interaction models: likes and follow connections read from the document store.

Built from store documents via Like.from_document(doc) / Connection.from_document(doc).
"""

from pydantic import BaseModel, ConfigDict

from .document import Document
from .fields import text


class Like(BaseModel):
    """
    A user -> video interaction. Only type == "like" rows feed the recommender;
    the same collection also holds comments.
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    user_id: str = ""
    video_id: str = ""
    type: str = ""

    @classmethod
    def from_document(cls, doc: Document) -> "Like":
        return cls(
            id=doc.id,
            user_id=text(doc.get("userId")),
            video_id=text(doc.get("videoId")),
            type=text(doc.get("type")),
        )


class Connection(BaseModel):
    """follower_id follows followed_id."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    follower_id: str = ""
    followed_id: str = ""

    @classmethod
    def from_document(cls, doc: Document) -> "Connection":
        return cls(
            id=doc.id,
            follower_id=text(doc.get("followerId")),
            followed_id=text(doc.get("followedId")),
        )
