from collections import OrderedDict
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from chat_client.logging import get_logger
from chat_client.config import settings
from chat_client.chat.completion import CompletionClient
from chat_client.chat.session import ChatSession

logger = get_logger("sessions")


class SessionStore:
    """In-memory sessions; nothing survives a restart.

    Holds at most ``max_sessions``. Creating one more evicts the least
    recently used session and cancels its in-flight request, if any.
    """

    def __init__(self, max_sessions: Optional[int] = None) -> None:
        self.max_sessions = max_sessions or settings.MAX_SESSIONS
        self._sessions: OrderedDict[str, ChatSession] = OrderedDict()

    def create(self, client: CompletionClient, model: Optional[str] = None) -> ChatSession:
        session = ChatSession(
            client=client,
            model=model or settings.DEFAULT_MODEL,
            max_attachment_bytes=settings.MAX_ATTACHMENT_BYTES,
        )
        while len(self._sessions) >= self.max_sessions:
            evicted_id, evicted = self._sessions.popitem(last=False)
            evicted.cancel()
            logger.info(f"[{evicted_id[:8]}] session evicted | sessions={len(self._sessions)}")
        self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> Optional[ChatSession]:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def remove(self, session_id: str) -> Optional[ChatSession]:
        return self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)


def get_store(req: Request) -> SessionStore:
    return req.app.state.sessions


def get_completion_client(req: Request) -> CompletionClient:
    return CompletionClient(
        http=req.app.state.http_client,
        url=settings.CHAT_API_URL,
        api_key=settings.CHAT_API_KEY,
        max_tokens=settings.MAX_TOKENS,
        temperature=settings.TEMPERATURE,
        timeout=settings.CHAT_API_TIMEOUT,
    )


def get_session(session_id: str, store: SessionStore = Depends(get_store)) -> ChatSession:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return session
