from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlparse

RAW_HOST = "raw.githubusercontent.com"
DEFAULT_MD_NAME = "document.md"

_MD_SUFFIX_RE = re.compile(r"\.md$", re.IGNORECASE)
_UNSAFE_FILENAME_RE = re.compile(r"[^A-Za-z0-9._-]+")
_NON_ASCII_RE = re.compile(r"[^\x20-\x7E]+")


class GitHubUrlError(ValueError):
    pass


@dataclass(frozen=True)
class RawGitHubUrl:
    raw_url: str
    filename: str


def _infer_filename(path: str) -> str | None:
    parts = [p for p in path.split("/") if p]
    return parts[-1] if parts else None


def _ensure_markdown(filename: str) -> None:
    if not _MD_SUFFIX_RE.search(filename):
        raise GitHubUrlError("The provided link does not point to a .md file")


def to_raw_github_url(url: str) -> RawGitHubUrl:
    """Map a GitHub file link to its raw-content URL.

    Accepts ``raw.githubusercontent.com`` links as-is and
    ``github.com/<user>/<repo>/blob/<branch>/<path>`` links.
    """
    candidate = str(url or "").strip()
    try:
        parsed = urlparse(candidate)
    except ValueError as e:
        raise GitHubUrlError("Invalid URL") from e
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise GitHubUrlError("Invalid URL")

    host = (parsed.hostname or "").lower()
    path = parsed.path

    if host == RAW_HOST:
        filename = _infer_filename(path) or DEFAULT_MD_NAME
        _ensure_markdown(filename)
        return RawGitHubUrl(raw_url=candidate, filename=filename)

    if host in ("github.com", "www.github.com"):
        parts = [p for p in path.split("/") if p]
        if "blob" in parts:
            blob = parts.index("blob")
            if blob >= 2 and len(parts) > blob + 2:
                user, repo = parts[0], parts[1]
                branch = parts[blob + 1]
                rest = "/".join(parts[blob + 2 :])
                filename = parts[-1]
                _ensure_markdown(filename)
                return RawGitHubUrl(raw_url=f"https://{RAW_HOST}/{user}/{repo}/{branch}/{rest}", filename=filename)

    raise GitHubUrlError(
        "Unsupported GitHub URL. Use a link like https://github.com/user/repo/blob/branch/path/file.md"
    )


def title_from_filename(md_name: str) -> str:
    return _MD_SUFFIX_RE.sub("", md_name or "")


def make_pdf_filename(md_name: str) -> str:
    base = title_from_filename(md_name)
    safe = _UNSAFE_FILENAME_RE.sub("_", base)[:128] or "document"
    return f"{safe}.pdf"


def ascii_filename(name: str) -> str:
    return _NON_ASCII_RE.sub("_", name)
