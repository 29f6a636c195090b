"""FastAPI demo application wired with SessionMiddleware."""

from fastapi import FastAPI

from .api import router
from .config import settings
from .middleware import SessionMiddleware
from .session_store import build_session_cache

app = FastAPI(title="cookie-session demo")

session_cache = build_session_cache(settings)
app.add_middleware(SessionMiddleware, cache=session_cache, settings=settings)

app.include_router(router)
