import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

import echobot.bot
from echobot.config import Settings, get_settings
from echobot.errors import InternalServerError, register_exception_handlers
from echobot.logging_config import setup_logging
from echobot.logging_middleware import RequestLoggingMiddleware
from echobot.responses import EscapedJSONResponse
from echobot.schemas import ChatRequest, ChatResponse, ErrorResponse

logger = logging.getLogger("echobot.api")

PACKAGE_DIR = Path(__file__).parent
STATIC_DIR = PACKAGE_DIR / "static"
PAGE_TEMPLATE = PACKAGE_DIR / "templates" / "index.html"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"[echobot] env={settings.app_env} endpoint=POST {settings.chat_endpoint_path} "
            f"cors={','.join(settings.cors_allow_origins)}"
        )
        yield

    app = FastAPI(
        title="EchoBot",
        version="1.0.0",
        lifespan=lifespan,
        default_response_class=EscapedJSONResponse,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def index() -> HTMLResponse:
        """Serve the chat page, pointed at the configured endpoint."""
        page = PAGE_TEMPLATE.read_text(encoding="utf-8")
        return HTMLResponse(page.replace("{{CHAT_ENDPOINT}}", settings.chat_endpoint_path))

    @app.post(
        settings.chat_endpoint_path,
        response_model=ChatResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def chat(payload: ChatRequest):
        try:
            reply = echobot.bot.handle_message(payload.message)
        except Exception as e:
            logger.exception("Internal Server Error during chat processing")
            raise InternalServerError() from e

        return ChatResponse(bot_response=reply)

    return app


setup_logging(get_settings().log_level)
app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run("echobot.main:app", host=settings.host, port=settings.port, reload=settings.app_env == "dev")
