#!/usr/bin/env python3
"""
Terminal chat client for EchoBot.

Talks to a running server through the same view model the web page mirrors:
type a line, press Enter, get the bot's reply. Blank lines are ignored.

Environment Variables:
  API_BASE_URL (optional): Backend URL (default http://127.0.0.1:8000)
  CHAT_ENDPOINT_PATH (optional): Chat route (default /api/chat)

Usage:
  python scripts/chat_repl.py
"""

import sys
from pathlib import Path

# Ensure repo root is on PYTHONPATH BEFORE importing echobot
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import asyncio
import logging

import httpx

from echobot.config import get_settings
from echobot.logging_config import setup_logging
from echobot.view import ChatView

logger = logging.getLogger("chat_repl")


async def main():
    settings = get_settings()
    # keep request logs out of the transcript unless asked for
    setup_logging("WARNING" if settings.log_level == "INFO" else settings.log_level)

    print(f"Connected to {settings.api_base_url}{settings.chat_endpoint_path}. Ctrl+D to quit.")

    async with httpx.AsyncClient(base_url=settings.api_base_url, timeout=10.0) as client:
        view = ChatView(client, endpoint=settings.chat_endpoint_path)
        shown = 0

        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break

            if not await view.submit(line):
                continue

            # print only the bubbles this exchange added (the user's own line is already on screen)
            for message in view.messages[shown:]:
                if message.sender == "bot":
                    print(f"Bot: {message.text}")
            shown = len(view.messages)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down...")
