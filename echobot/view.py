from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional
import logging

import httpx

logger = logging.getLogger("echobot.view")

Sender = Literal["user", "bot"]

GENERIC_FAILURE = "Could not reach the server."
MALFORMED_RESPONSE = "Malformed response from server."
BUSY_MARKER = "Bot is typing..."


@dataclass(frozen=True)
class ChatMessage:
    text: str
    sender: Sender


@dataclass
class ViewState:
    """
    Everything the chat screen shows:
    - append-only list of rendered messages
    - busy flag (controls disabled, indicator shown)
    - current draft in the input field and whether it has focus
    """
    messages: List[ChatMessage] = field(default_factory=list)
    busy: bool = False
    draft: str = ""
    focused: bool = True

    @property
    def controls_enabled(self) -> bool:
        return not self.busy


class ResponseError(Exception):
    """The server answered, but not with a usable reply."""


class ChatView:
    """
    Client-side chat screen driven by one POST per submission.

    The busy flag is the only admission gate: while a request is in flight
    further submissions are refused, so there is never more than one
    outstanding call per view.
    """

    def __init__(self, client: httpx.AsyncClient, endpoint: str = "/api/chat"):
        self.client = client
        self.endpoint = endpoint
        self.state = ViewState()

    @property
    def messages(self) -> List[ChatMessage]:
        return self.state.messages

    def set_draft(self, text: str) -> None:
        self.state.draft = text

    async def submit(self, text: Optional[str] = None) -> bool:
        """Send the draft (or `text`). Returns False when nothing was sent."""
        # the input is disabled while busy: a refused submit leaves the state alone
        if self.state.busy:
            logger.debug("Submission ignored: a request is already in flight.")
            return False

        if text is not None:
            self.state.draft = text
        text = self.state.draft

        if not text.strip():
            logger.debug("Submission ignored: message is empty.")
            return False

        self._append(text, "user")
        self.state.draft = ""
        self.state.busy = True
        self.state.focused = False

        try:
            reply = await self._send(text)
            self._append(reply, "bot")
        except Exception as e:
            # every failure ends this exchange as a bot bubble, never as a crash
            logger.warning(f"Chat request failed: {e!r}")
            self._append(failure_text(e), "bot")
        finally:
            self._finalize()

        return True

    def render(self) -> str:
        lines = [f"{'You' if m.sender == 'user' else 'Bot'}: {m.text}" for m in self.state.messages]
        if self.state.busy:
            lines.append(BUSY_MARKER)
        return "\n".join(lines)

    # -------- internals --------
    def _append(self, text: str, sender: Sender) -> None:
        self.state.messages.append(ChatMessage(text=text, sender=sender))

    def _finalize(self) -> None:
        self.state.busy = False
        self.state.focused = True

    async def _send(self, text: str) -> str:
        response = await self.client.post(self.endpoint, json={"message": text})

        if not response.is_success:
            raise ResponseError(_error_detail(response))

        try:
            body = response.json()
        except ValueError:
            raise ResponseError(MALFORMED_RESPONSE)

        if not isinstance(body, dict) or not isinstance(body.get("botResponse"), str):
            raise ResponseError(MALFORMED_RESPONSE)
        return body["botResponse"]


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"HTTP error! status: {response.status_code}"


def failure_text(error: Exception) -> str:
    detail = str(error).strip() or GENERIC_FAILURE
    return f"Error: {detail}"
