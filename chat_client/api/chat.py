from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from chat_client.logging import get_logger
from chat_client.api.deps import SessionStore, get_completion_client, get_session, get_store
from chat_client.api.models import (
    CreateSessionRequest,
    DraftRequest,
    ModelEntry,
    SelectModelRequest,
    SendRequest,
    SessionView,
    TransitionView,
)
from chat_client.chat import capabilities
from chat_client.chat.completion import CompletionClient
from chat_client.chat.errors import TurnInProgressError, ValidationError
from chat_client.chat.events import (
    AttachmentRemoved,
    AttachmentSelected,
    CancelRequested,
    ChatEvent,
    ConversationCleared,
    DraftChanged,
    ModelSelected,
    SendRequested,
)
from chat_client.chat.session import ChatSession

router = APIRouter()
logger = get_logger("api")


async def dispatch(session: ChatSession, event: ChatEvent) -> TransitionView:
    try:
        transition = await session.handle(event)
    except TurnInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except ValidationError as e:
        logger.info(f"[{session.id[:8]}] rejected {type(event).__name__}: {e.message}")
        raise HTTPException(status_code=422, detail=e.message)

    return TransitionView(
        event=transition.event,
        before=transition.before,
        after=transition.after,
        message=transition.message,
        session=SessionView.from_session(session),
    )


@router.get("/models")
def list_models() -> list[ModelEntry]:
    return [ModelEntry.from_catalog(m) for m in capabilities.list_models()]


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
def create_session(
    request: CreateSessionRequest,
    store: SessionStore = Depends(get_store),
    client: CompletionClient = Depends(get_completion_client),
) -> SessionView:
    try:
        session = store.create(client, request.model)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    logger.info(f"[{session.id[:8]}] session created | model={session.model} | sessions={len(store)}")
    return SessionView.from_session(session)


@router.get("/sessions/{session_id}")
def read_session(session: ChatSession = Depends(get_session)) -> SessionView:
    return SessionView.from_session(session)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(
    session: ChatSession = Depends(get_session),
    store: SessionStore = Depends(get_store),
) -> None:
    session.cancel()
    store.remove(session.id)


@router.put("/sessions/{session_id}/model")
async def select_model(request: SelectModelRequest, session: ChatSession = Depends(get_session)) -> TransitionView:
    return await dispatch(session, ModelSelected(request.model))


@router.put("/sessions/{session_id}/draft")
async def update_draft(request: DraftRequest, session: ChatSession = Depends(get_session)) -> TransitionView:
    return await dispatch(session, DraftChanged(request.text))


@router.post("/sessions/{session_id}/attachment")
async def upload_attachment(
    file: UploadFile = File(...),
    session: ChatSession = Depends(get_session),
) -> TransitionView:
    return await dispatch(session, AttachmentSelected(file))


@router.delete("/sessions/{session_id}/attachment")
async def remove_attachment(session: ChatSession = Depends(get_session)) -> TransitionView:
    return await dispatch(session, AttachmentRemoved())


@router.post("/sessions/{session_id}/messages")
async def send_message(request: SendRequest, session: ChatSession = Depends(get_session)) -> TransitionView:
    return await dispatch(session, SendRequested(request.text))


@router.post("/sessions/{session_id}/cancel")
async def cancel_request(session: ChatSession = Depends(get_session)) -> TransitionView:
    return await dispatch(session, CancelRequested())


@router.delete("/sessions/{session_id}/messages")
async def clear_conversation(session: ChatSession = Depends(get_session)) -> TransitionView:
    return await dispatch(session, ConversationCleared())
