from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

from chat_client.chat.capabilities import ModelInfo as CatalogEntry
from chat_client.chat.session import ChatSession
from chat_client.chat.state import AttachmentSummary, ControlState, RenderedMessage, SessionStatus


class CreateSessionRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")
    model: Optional[str] = None


class SelectModelRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")
    model: str

    @field_validator("model", mode="before")
    @classmethod
    def strip_model(cls, v):
        return v.strip() if isinstance(v, str) else v


class DraftRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")
    text: str = ""


class SendRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")
    # Omitted text sends the current draft.
    text: Optional[str] = None


class ModelEntry(BaseModel):
    id: str
    label: str
    multimodal: bool

    @classmethod
    def from_catalog(cls, info: CatalogEntry) -> "ModelEntry":
        return cls(id=info.id, label=info.label, multimodal=info.multimodal)


class SessionView(BaseModel):
    id: str
    model: str
    model_info: str
    status: SessionStatus
    loading_label: Optional[str] = None
    controls: ControlState
    draft: str
    attachment: Optional[AttachmentSummary] = None
    history_length: int
    transcript: list[RenderedMessage]

    @classmethod
    def from_session(cls, session: ChatSession) -> "SessionView":
        attachment = None
        if session.attachment is not None:
            attachment = AttachmentSummary(
                file_name=session.attachment.file_name,
                mime_type=session.attachment.mime_type,
                size_bytes=session.attachment.size_bytes,
            )
        return cls(
            id=session.id,
            model=session.model,
            model_info=session.model_info,
            status=session.status,
            loading_label=session.loading_label,
            controls=session.controls(),
            draft=session.draft,
            attachment=attachment,
            history_length=len(session.history),
            transcript=list(session.transcript),
        )


class TransitionView(BaseModel):
    event: str
    before: SessionStatus
    after: SessionStatus
    message: Optional[RenderedMessage] = None
    session: SessionView
