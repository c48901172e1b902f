from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from mdpdf.fetch import FetchError, fetch_markdown
from mdpdf.github import GitHubUrlError, make_pdf_filename, title_from_filename, to_raw_github_url
from mdpdf.layout import render_markdown_to_pdf


def log(msg: str) -> None:
    print(msg, file=sys.stderr)


def load_source(source: str) -> tuple[str, str]:
    """Return (markdown, md filename) for a GitHub link or a local path."""
    if source.lower().startswith(("http://", "https://")):
        target = to_raw_github_url(source)
        log(f"Fetching {target.raw_url}")
        return asyncio.run(fetch_markdown(target.raw_url)), target.filename
    path = Path(source)
    return path.read_text(encoding="utf-8-sig"), path.name


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Render a GitHub Markdown file (or a local .md) to PDF.")
    ap.add_argument("source", help="GitHub blob/raw URL or local Markdown path")
    ap.add_argument("-o", "--out", default=None, help="Output PDF path (default: derived from the Markdown filename)")
    ap.add_argument("--title", default=None, help="PDF title metadata (default: Markdown filename without .md)")
    args = ap.parse_args(argv)

    try:
        markdown, md_name = load_source(args.source)
    except (GitHubUrlError, FetchError, OSError, UnicodeDecodeError) as e:
        log(f"Error: {e}")
        return 1

    if not markdown.strip():
        log("Error: source file is empty")
        return 1

    title = args.title or title_from_filename(md_name)
    out = Path(args.out) if args.out else Path(make_pdf_filename(md_name))
    data = render_markdown_to_pdf(markdown, title)
    try:
        out.write_bytes(data)
    except OSError as e:
        log(f"Error: cannot write {out}: {e}")
        return 1
    log(f"Wrote {out} ({len(data)} bytes)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
