"""Demo HTTP routes exercising the session lifecycle."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from .middleware import get_session
from .session import Session
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/api")

router = APIRouter(default_response_class=PlainTextResponse)


@router.get("/")
def visit(session: Session = Depends(get_session)):
    """Begin the session and count visits."""
    session.begin()
    visits = int(session.get("visits", 0)) + 1
    session.set("visits", visits)
    return f"Hello from cookie-session!\nVisits this session: {visits}\n"


@router.get("/peek")
def peek(session: Session = Depends(get_session)):
    """Report the visit count without starting a session."""
    return f"Visits this session: {session.get('visits', 0)}\n"


@router.get("/regenerate")
def regenerate(session: Session = Depends(get_session)):
    """Rotate the session id, e.g. after login."""
    session.begin()
    session.regenerate()
    logger.info("Session id regenerated")
    return "Session ID regenerated.\n"


@router.get("/logout")
def logout(session: Session = Depends(get_session)):
    """Destroy the session."""
    session.destroy()
    return "Logged out and session destroyed.\n"
