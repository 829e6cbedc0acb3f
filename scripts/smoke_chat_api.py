#!/usr/bin/env python3
"""
Smoke Test — Chat API

Verifies against a running server:
  1. Echo reply for a normal message
  2. Original text is echoed untrimmed
  3. 400 with the fixed body for blank / missing / non-string message
  4. Identical input gives byte-identical bodies

Usage:
  uvicorn echobot.main:app &
  python scripts/smoke_chat_api.py
"""

import json
import os
import sys

import requests

BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000").rstrip("/")
ENDPOINT = os.getenv("CHAT_ENDPOINT_PATH", "/api/chat")
URL = f"{BASE_URL}{ENDPOINT}"

INVALID_BODY = {"error": "Message parameter is required and must be a non-empty string."}


def post_chat(payload) -> requests.Response:
    return requests.post(URL, json=payload, timeout=10)


def main():
    print(f"[TEST] URL: {URL}\n")
    failures = []

    # 1) normal echo
    resp = post_chat({"message": "Hello there!"})
    print(f"Response: {resp.status_code} {resp.text}")
    if resp.status_code != 200 or resp.json() != {"botResponse": "You said: 'Hello there!'"}:
        failures.append(("Hello there!", f"unexpected response {resp.status_code} {resp.text}"))

    # 2) surrounding whitespace survives
    resp = post_chat({"message": "  padded  "})
    if resp.status_code != 200 or resp.json().get("botResponse") != "You said: '  padded  '":
        failures.append(("  padded  ", f"unexpected response {resp.status_code} {resp.text}"))

    # 3) invalid payloads
    for payload in ({"message": ""}, {"message": "   "}, {}, {"message": 42}, {"message": None}):
        resp = post_chat(payload)
        if resp.status_code != 400 or resp.json() != INVALID_BODY:
            failures.append((json.dumps(payload), f"expected 400, got {resp.status_code} {resp.text}"))

    # 4) idempotent
    first = post_chat({"message": "again"}).content
    second = post_chat({"message": "again"}).content
    if first != second:
        failures.append(("again", "bodies differ between identical calls"))

    if failures:
        for inp, reason in failures:
            print(f"[FAIL] {inp} -> {reason}")
        return 2

    print("[PASS] all chat API smoke tests")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except requests.ConnectionError as e:
        print(f"[ERROR] Could not reach {URL}: {e}", file=sys.stderr)
        raise SystemExit(1)
