from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from database import SQLiteKeyValueStore, MemoryKeyValueStore
from routers.auth import router as auth_router
from routers.profiles import router as profiles_router
from routers.leads import router as leads_router
from services.account_store import AccountStore
from services.profile_store import ProfileStore
from services.session import SessionManager
from services.lead_service import LeadServiceClient
from services.orchestrator import SearchOrchestrator
from config import settings
import logging

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)


def build_session(db_path: str, persist_session: bool) -> SessionManager:
    kv = SQLiteKeyValueStore(db_path)
    marker_store = kv if persist_session else MemoryKeyValueStore()
    return SessionManager(AccountStore(kv), ProfileStore(kv), marker_store)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.session = build_session(settings.db_path, settings.persist_session)
    app.state.orchestrator = SearchOrchestrator(LeadServiceClient())
    yield


app = FastAPI(
    title="Lead Prospector",
    description="Ideal Customer Profile lead search powered by Gemini with search grounding",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.include_router(auth_router)
app.include_router(profiles_router)
app.include_router(leads_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="127.0.0.1", port=8001, reload=True)
