"""Shared FastAPI dependencies — screening service and flash messages."""

from fastapi import Request

from resume_screener.screening.service import ScreeningService


def get_service(request: Request) -> ScreeningService:
    return request.app.state.service


def flash(request: Request, message: str, category: str = "success") -> None:
    """Queue a message for the next rendered page (kept in the session cookie)."""
    request.session.setdefault("_flashes", []).append({"message": message, "type": category})


def pop_flashes(request: Request) -> list[dict]:
    return request.session.pop("_flashes", [])
