import base64
from typing import Optional, Protocol

from chat_client.chat.errors import ValidationError
from chat_client.chat.state import Attachment

MIB = 1024 * 1024
DEFAULT_MAX_BYTES = 10 * MIB

NOT_AN_IMAGE = "Please select an image file."


def too_large_message(max_bytes: int) -> str:
    if max_bytes % MIB == 0:
        return f"Image size must be less than {max_bytes // MIB}MB."
    return f"Image size must be less than {max_bytes} bytes."


class ImageFile(Protocol):
    """Anything shaped like fastapi.UploadFile."""

    filename: Optional[str]
    content_type: Optional[str]
    size: Optional[int]

    async def read(self) -> bytes: ...


def to_data_uri(mime_type: str, data: bytes) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def _check(mime_type: Optional[str], size: Optional[int], max_bytes: int) -> None:
    if not mime_type or not mime_type.startswith("image/"):
        raise ValidationError(NOT_AN_IMAGE)
    if size is not None and size > max_bytes:
        raise ValidationError(too_large_message(max_bytes))


async def stage_attachment(file: ImageFile, max_bytes: int = DEFAULT_MAX_BYTES) -> Attachment:
    """Validate an uploaded image and decode it into a data URI.

    Declared type and size are checked before reading so an oversized or
    non-image upload is never loaded. The size is checked again against the
    bytes actually read, since clients may omit or misreport it.
    """
    mime_type = (file.content_type or "").split(";")[0].strip().lower()
    _check(mime_type, file.size, max_bytes)

    data = await file.read()
    _check(mime_type, len(data), max_bytes)

    return Attachment(
        file_name=file.filename,
        mime_type=mime_type,
        size_bytes=len(data),
        data_uri=to_data_uri(mime_type, data),
    )
