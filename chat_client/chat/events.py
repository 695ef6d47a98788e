from dataclasses import dataclass
from typing import Any, Optional, Union

from chat_client.chat.state import ControlState, RenderedMessage, SessionStatus


@dataclass(frozen=True)
class ModelSelected:
    model: str


@dataclass(frozen=True)
class DraftChanged:
    text: str


@dataclass(frozen=True)
class AttachmentSelected:
    # Any UploadFile-shaped object, see chat_client.chat.attachment.ImageFile.
    file: Any


@dataclass(frozen=True)
class AttachmentRemoved:
    pass


@dataclass(frozen=True)
class SendRequested:
    # None sends the current draft.
    text: Optional[str] = None


@dataclass(frozen=True)
class CancelRequested:
    pass


@dataclass(frozen=True)
class ConversationCleared:
    pass


ChatEvent = Union[
    ModelSelected,
    DraftChanged,
    AttachmentSelected,
    AttachmentRemoved,
    SendRequested,
    CancelRequested,
    ConversationCleared,
]


@dataclass(frozen=True)
class StateTransition:
    event: str
    before: SessionStatus
    after: SessionStatus
    controls: ControlState
    message: Optional[RenderedMessage] = None
