"""FastAPI application factory."""

import logging
from pathlib import Path

from fastapi import FastAPI
from jinja2 import Environment, FileSystemLoader
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import HTMLResponse

from resume_screener.config import AppConfig
from resume_screener.screening.service import ScreeningService, build_service

from .dependencies import pop_flashes
from .routes import router

logger = logging.getLogger("resume_screener.web")

WEB_DIR = Path(__file__).parent
TEMPLATES_DIR = WEB_DIR / "templates"


def _create_jinja_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=True,
    )


class _Templates:
    """Thin wrapper that mimics Jinja2Templates from starlette."""

    def __init__(self):
        self.env = _create_jinja_env()

    def TemplateResponse(self, name: str, context: dict, status_code: int = 200):
        template = self.env.get_template(name)

        # Every page shows pending flash messages
        request = context.get("request")
        if request is not None and "flashes" not in context:
            context["flashes"] = pop_flashes(request)

        html = template.render(**context)
        return HTMLResponse(html, status_code=status_code)


def create_app(config: AppConfig | None = None, service: ScreeningService | None = None) -> FastAPI:
    config = config or AppConfig()
    app = FastAPI(title="Resume Screener")

    # Session cookie carries flash messages across redirects
    app.add_middleware(SessionMiddleware, secret_key=config.session_secret)

    app.state.config = config
    app.state.service = service or build_service(config)
    app.state.templates = _Templates()

    app.include_router(router)
    logger.info("Resume Screener web app ready (threshold %.1f%%)", config.screening.shortlist_threshold)
    return app
