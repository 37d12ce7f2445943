"""UserProfile model: public profile fields of an uploader."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .document import Document
from .fields import optional_text, text


class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str = ""
    username: str = ""
    photo_url: Optional[str] = None
    restaurant_id: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Document) -> "UserProfile":
        # Older profiles were written with "displayname"
        display_name = text(doc.get("displayName")) or text(doc.get("displayname"))
        return cls(
            id=doc.id,
            display_name=display_name,
            username=text(doc.get("username")),
            photo_url=optional_text(doc.get("photoURL")),
            restaurant_id=optional_text(doc.get("restaurantId")),
        )
