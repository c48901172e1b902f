from __future__ import annotations

import httpx

from .config import FETCH_TIMEOUT_S, MAX_FETCH_BYTES, USER_AGENT
from .logging_utils import get_logger

log = get_logger(__name__)


class FetchError(RuntimeError):
    pass


async def _read_limited(resp: httpx.Response, max_bytes: int) -> tuple[bytes, bool]:
    buf = bytearray()
    truncated = False
    async for chunk in resp.aiter_bytes():
        if not chunk:
            continue
        remaining = max_bytes - len(buf)
        if len(chunk) > remaining:
            buf.extend(chunk[:remaining])
            truncated = True
            break
        buf.extend(chunk)
    return bytes(buf), truncated


async def fetch_markdown(
    raw_url: str,
    *,
    timeout_s: float = FETCH_TIMEOUT_S,
    max_bytes: int = MAX_FETCH_BYTES,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Download a Markdown file as text.

    Raises ``FetchError`` for non-2xx responses, transport failures and
    bodies larger than ``max_bytes``.
    """
    if max_bytes <= 0:
        raise FetchError("max_bytes must be > 0")

    headers = {
        "user-agent": USER_AGENT,
        "accept": "text/plain",
        "cache-control": "no-store",
    }

    async with httpx.AsyncClient(follow_redirects=True, timeout=httpx.Timeout(timeout_s), transport=transport) as client:
        try:
            async with client.stream("GET", raw_url, headers=headers) as resp:
                status = int(resp.status_code)
                if status < 200 or status >= 300:
                    raise FetchError(f"Failed to fetch markdown: {status} {resp.reason_phrase}".rstrip())
                data, truncated = await _read_limited(resp, max_bytes)
                if truncated:
                    raise FetchError(f"Failed to fetch markdown: file exceeds {max_bytes} bytes")
                text = data.decode(resp.encoding or "utf-8", errors="replace")
        except (httpx.TimeoutException, httpx.HTTPError) as e:
            raise FetchError(f"Failed to fetch markdown: {type(e).__name__}: {e}") from e

    log.info("Fetched %s (%d bytes)", raw_url, len(data))
    return text
