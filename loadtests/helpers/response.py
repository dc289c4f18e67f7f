"""Response error extraction for load test observability.

Every storefront response is an envelope `{success, message, data, error,
timestamp}`. Failures carry the error kind in `error` and the human-readable
reason in `message`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a compact `Kind: message` string from an API error response."""
    try:
        body = response.json()
    except Exception:
        # Not JSON, return raw text truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if isinstance(body, dict) and "error" in body:
        return f"{body.get('error')}: {body.get('message', '')}"

    return str(body)[:300]
