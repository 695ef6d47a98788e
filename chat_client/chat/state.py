from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImageURL(BaseModel):
    url: str


class ImagePart(BaseModel):
    type: Literal["image_url"] = "image_url"
    image_url: ImageURL


ContentPart = Annotated[Union[TextPart, ImagePart], Field(discriminator="type")]


class Message(BaseModel):
    # History entries are never edited after they are appended.
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: Union[str, list[ContentPart]]


def build_user_content(text: str, image_url: Optional[str]) -> Union[str, list[ContentPart]]:
    """Collapse a lone text part into a bare string; otherwise send the parts list."""
    parts: list[ContentPart] = []
    if text:
        parts.append(TextPart(text=text))
    if image_url:
        parts.append(ImagePart(image_url=ImageURL(url=image_url)))

    if len(parts) == 1 and isinstance(parts[0], TextPart):
        return text
    return parts


class Attachment(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_name: Optional[str] = None
    mime_type: str
    size_bytes: int
    data_uri: str


class AttachmentSummary(BaseModel):
    file_name: Optional[str] = None
    mime_type: str
    size_bytes: int


class SessionStatus(str, Enum):
    IDLE = "idle"
    SENDING = "sending"


class RenderedMessage(BaseModel):
    role: Literal["user", "assistant"]
    html: str
    image_url: Optional[str] = None
    time: str
    error: bool = False


class ControlState(BaseModel):
    send_enabled: bool
    attachment_visible: bool
    attachment_enabled: bool
    loading: bool
