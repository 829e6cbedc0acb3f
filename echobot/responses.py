import json
from typing import Any

from fastapi.responses import JSONResponse


class EscapedJSONResponse(JSONResponse):
    """
    JSON with every non-ASCII character escaped.
    Lone surrogates are legal in a JSON string but cannot be encoded as
    UTF-8, so they only survive the round trip as \\uXXXX escapes.
    """

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=True,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("ascii")
