import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from chat_client.api.chat import router as chat_router
from chat_client.api.deps import SessionStore

from contextlib import asynccontextmanager

@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.http_client = httpx.AsyncClient()
    app.state.sessions = SessionStore()
    yield
    await app.state.http_client.aclose()

app = FastAPI(title="Chat Client", version="0.1.0", lifespan=lifespan)

from chat_client.config import settings

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(chat_router)


@app.get("/health")
def health():
    return {"status": "ok"}
