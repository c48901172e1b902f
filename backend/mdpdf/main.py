from __future__ import annotations

import asyncio
from urllib.parse import quote

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import APP_VERSION, CORS_ORIGINS, FETCH_TIMEOUT_S, MAX_FETCH_BYTES
from .fetch import FetchError, fetch_markdown
from .github import GitHubUrlError, ascii_filename, make_pdf_filename, title_from_filename, to_raw_github_url
from .layout import render_markdown_to_pdf
from .logging_utils import get_logger
from .schemas import ConvertRequest, HealthResponse

log = get_logger(__name__)

app = FastAPI(title="github-md-pdf")
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def _invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": "Request body must be JSON like {\"url\": \"https://github.com/...\"}"})


def content_disposition(filename: str) -> str:
    return f"attachment; filename=\"{ascii_filename(filename)}\"; filename*=UTF-8''{quote(filename, safe='')}"


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=APP_VERSION,
        fetch_timeout_s=FETCH_TIMEOUT_S,
        max_fetch_bytes=MAX_FETCH_BYTES,
    )


@app.post("/api/convert")
async def convert(req: ConvertRequest | None = None) -> Response:
    url = ((req.url if req else None) or "").strip()
    if not url:
        raise HTTPException(status_code=400, detail="Missing 'url' in body")

    try:
        target = to_raw_github_url(url)
    except GitHubUrlError as e:
        raise HTTPException(status_code=400, detail=str(e) or "Invalid GitHub URL") from e

    try:
        markdown = await fetch_markdown(target.raw_url)
    except FetchError as e:
        log.warning("Fetch failed for %s: %s", target.raw_url, e)
        raise HTTPException(status_code=502, detail=str(e)) from e

    if not markdown.strip():
        raise HTTPException(status_code=422, detail="Fetched file is empty")

    title = title_from_filename(target.filename)
    try:
        pdf_bytes = await asyncio.to_thread(render_markdown_to_pdf, markdown, title)
    except Exception as e:
        log.exception("PDF render error")
        raise HTTPException(status_code=500, detail="Unexpected server error") from e

    filename = make_pdf_filename(target.filename)
    log.info("Rendered %s -> %s (%d bytes)", target.raw_url, filename, len(pdf_bytes))
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": content_disposition(filename),
            "Cache-Control": "no-store",
        },
    )
