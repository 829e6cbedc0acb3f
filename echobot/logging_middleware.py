import logging
import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("echobot.http")

REQUEST_ID_HEADER = "x-request-id"
MAX_REQUEST_ID_LENGTH = 128


def _request_id(request: Request) -> str:
    """Reuse a caller-supplied id so a chat exchange can be traced end to end."""
    incoming = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH and incoming.isprintable():
        return incoming
    return str(uuid.uuid4())


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        request_id = _request_id(request)
        request.state.request_id = request_id
        client = request.client.host if request.client else "-"

        logger.info(f"[START] request_id={request_id} client={client} {request.method} {request.url.path}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.error(f"[ERROR] request_id={request_id} duration_ms={duration_ms} err={e!r}")
            raise

        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.log(
            _level_for(response.status_code),
            f"[END]   request_id={request_id} status={response.status_code} duration_ms={duration_ms}",
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
