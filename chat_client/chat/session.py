import asyncio
import time
import uuid
from datetime import datetime
from typing import Optional

from chat_client.logging import get_logger
from chat_client.chat import capabilities
from chat_client.chat.attachment import DEFAULT_MAX_BYTES, ImageFile, stage_attachment
from chat_client.chat.completion import CompletionClient
from chat_client.chat.errors import ChatError, TurnInProgressError, ValidationError
from chat_client.chat.events import (
    AttachmentRemoved,
    AttachmentSelected,
    CancelRequested,
    ChatEvent,
    ConversationCleared,
    DraftChanged,
    ModelSelected,
    SendRequested,
    StateTransition,
)
from chat_client.chat.formatting import render
from chat_client.chat.state import (
    Attachment,
    ControlState,
    Message,
    RenderedMessage,
    SessionStatus,
    build_user_content,
)

logger = get_logger("session")

CANCELLED = "Request cancelled"


def _now() -> str:
    return datetime.now().strftime("%H:%M")


class ChatSession:
    """Conversation state for one chat window.

    History only ever holds well-formed exchanges: a failed turn keeps the
    user message but adds no assistant reply. The transcript is what the UI
    shows, error lines included.
    """

    def __init__(
        self,
        client: CompletionClient,
        model: str,
        max_attachment_bytes: int = DEFAULT_MAX_BYTES,
        session_id: Optional[str] = None,
    ):
        if not capabilities.is_known_model(model):
            raise ValidationError(f"Unknown model: {model}")
        self.id = session_id or uuid.uuid4().hex
        self.client = client
        self.model = model
        self.max_attachment_bytes = max_attachment_bytes
        self.history: list[Message] = []
        self.transcript: list[RenderedMessage] = []
        self.attachment: Optional[Attachment] = None
        self.draft = ""
        self.status = SessionStatus.IDLE
        self._pending: Optional[asyncio.Future] = None
        self._cancel_requested = False
        # Bumped on every clear so a reply to a discarded conversation is dropped.
        self._generation = 0

    # Derived UI state

    @property
    def multimodal(self) -> bool:
        return capabilities.is_multimodal(self.model)

    @property
    def send_enabled(self) -> bool:
        return bool(self.draft.strip()) or self.attachment is not None

    @property
    def model_info(self) -> str:
        return capabilities.model_info_text(self.model)

    @property
    def loading_label(self) -> Optional[str]:
        if self.status is not SessionStatus.SENDING:
            return None
        return f"{capabilities.display_name(self.model)} is analyzing"

    def controls(self) -> ControlState:
        return ControlState(
            send_enabled=self.send_enabled,
            attachment_visible=self.multimodal,
            attachment_enabled=self.multimodal,
            loading=self.status is SessionStatus.SENDING,
        )

    # Commands

    def set_draft(self, text: str) -> None:
        self.draft = text

    def switch_model(self, model: str) -> None:
        if not capabilities.is_known_model(model):
            raise ValidationError(f"Unknown model: {model}")
        self.model = model
        self.clear()
        logger.info(f"[{self.id[:8]}] model switched | model={model}")

    def clear(self) -> None:
        self._generation += 1
        self.history = []
        self.transcript = []
        self.remove_attachment()

    def remove_attachment(self) -> None:
        self.attachment = None

    async def attach(self, file: ImageFile) -> Attachment:
        if not self.multimodal:
            raise ValidationError(f"Model {self.model} does not accept images")
        attachment = await stage_attachment(file, self.max_attachment_bytes)
        self.attachment = attachment
        logger.info(
            f"[{self.id[:8]}] attachment staged | mime={attachment.mime_type} size={attachment.size_bytes}"
        )
        return attachment

    def cancel(self) -> bool:
        if self._pending is None or self._pending.done():
            return False
        self._cancel_requested = True
        self._pending.cancel()
        return True

    async def submit_turn(self, text: str) -> RenderedMessage:
        """Send one turn and return the transcript entry for its outcome."""
        if self.status is SessionStatus.SENDING:
            raise TurnInProgressError("A request is already in progress")

        message_text = text.strip()
        attachment = self.attachment
        if not message_text and attachment is None:
            raise ValidationError("Nothing to send")

        # Image parts only go to models that accept them; otherwise the text goes alone.
        image_url = attachment.data_uri if attachment is not None and self.multimodal else None
        if not message_text and image_url is None:
            raise ValidationError("Nothing to send")

        self.history.append(Message(role="user", content=build_user_content(message_text, image_url)))
        self.transcript.append(RenderedMessage(
            role="user",
            html=render(message_text),
            image_url=attachment.data_uri if attachment is not None else None,
            time=_now(),
        ))

        self.draft = ""
        self.remove_attachment()
        self.status = SessionStatus.SENDING

        turn_id = str(uuid.uuid4())[:8]
        generation = self._generation
        start_time = time.time()
        logger.info(
            f"[{turn_id}] request | session={self.id[:8]} model={self.model} "
            f"history={len(self.history)} image={image_url is not None}"
        )

        try:
            self._pending = asyncio.ensure_future(self.client.complete(self.model, list(self.history)))
            reply = await self._pending
        except asyncio.CancelledError:
            if not self._cancel_requested:
                raise
            logger.info(f"[{turn_id}] cancelled")
            return self._error_line(CANCELLED, generation)
        except ChatError as e:
            logger.error(f"[{turn_id}] error: {e.message}")
            return self._error_line(e.message, generation)
        finally:
            self._pending = None
            self._cancel_requested = False
            self.status = SessionStatus.IDLE

        rendered = RenderedMessage(role="assistant", html=render(reply), time=_now())
        if generation != self._generation:
            logger.info(f"[{turn_id}] conversation cleared while sending; reply dropped")
            return rendered
        self.history.append(Message(role="assistant", content=reply))
        self.transcript.append(rendered)

        elapsed = time.time() - start_time
        logger.info(f"[{turn_id}] complete | elapsed={elapsed:.2f}s | chars={len(reply)}")
        return rendered

    def _error_line(self, reason: str, generation: int) -> RenderedMessage:
        rendered = RenderedMessage(role="assistant", html=render(f"Error: {reason}"), time=_now(), error=True)
        if generation == self._generation:
            self.transcript.append(rendered)
        return rendered

    # Dispatch

    async def handle(self, event: ChatEvent) -> StateTransition:
        before = self.status
        message: Optional[RenderedMessage] = None

        if isinstance(event, ModelSelected):
            self.switch_model(event.model)
        elif isinstance(event, DraftChanged):
            self.set_draft(event.text)
        elif isinstance(event, AttachmentSelected):
            await self.attach(event.file)
        elif isinstance(event, AttachmentRemoved):
            self.remove_attachment()
        elif isinstance(event, SendRequested):
            text = self.draft if event.text is None else event.text
            message = await self.submit_turn(text)
        elif isinstance(event, CancelRequested):
            self.cancel()
        elif isinstance(event, ConversationCleared):
            self.clear()
        else:
            raise TypeError(f"Unsupported event: {event!r}")

        return StateTransition(
            event=type(event).__name__,
            before=before,
            after=self.status,
            controls=self.controls(),
            message=message,
        )
