"""
Site Audit Engine — FastAPI Backend

Endpoints:
  GET /analyze?url=...  — Audit one page (returns JSON report)
  GET /health           — Health check
"""

import logging
from urllib.parse import urlparse

from fastapi import FastAPI, Header, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import config
from .engine import run_audit
from .errors import FetchError, InvalidURLError
from .fetcher import is_private_host

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)


app = FastAPI(
    title="Site Audit Engine",
    version="1.0.0",
)


@app.exception_handler(HTTPException)
async def http_error(request: Request, exc: HTTPException):
    # Clients tell failures from reports by the "error" key
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


class Finding(BaseModel):
    severity: str | None = None
    type: str | None = None
    message: str


class CategoryReport(BaseModel):
    label: str
    score: int
    status: str
    details: list[Finding]
    benchmark: int
    metrics: dict | None = None


class Fix(BaseModel):
    category: str
    severity: str
    message: str


class AuditResponse(BaseModel):
    url: str
    analyzedAt: str
    responseTime: int
    totalScore: int
    benchmarks: dict[str, int]
    categories: dict[str, CategoryReport]
    topFixes: list[Fix]


def validate_url(url: str | None) -> str:
    """Return the URL if it is an auditable public http(s) address."""
    if not url:
        raise InvalidURLError("Missing url parameter")

    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        raise InvalidURLError("Invalid URL format")

    if parsed.scheme not in ("http", "https") or not hostname:
        raise InvalidURLError("Invalid URL format")

    if is_private_host(hostname):
        raise InvalidURLError("Private/local URLs not allowed")

    return url


@app.get("/health")
async def health():
    return {"status": "ok", "engine": "siteaudit"}


@app.get("/analyze", response_model=AuditResponse, response_model_exclude_none=True)
async def analyze(
    url: str | None = Query(default=None),
    x_api_key: str = Header(default=""),
):
    # Auth check
    if config.API_SECRET and x_api_key != config.API_SECRET:
        raise HTTPException(status_code=401, detail="Invalid API key")

    try:
        url = validate_url(url)
    except InvalidURLError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return await run_audit(url)
    except FetchError as e:
        log.warning("Audit of %s failed: %s", url, e)
        raise HTTPException(
            status_code=500,
            detail="Could not analyze the URL. Check that the site is reachable.",
        )
    except Exception:
        log.exception("Unexpected error auditing %s", url)
        raise HTTPException(status_code=500, detail="Audit failed")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("siteaudit.main:app", host="0.0.0.0", port=config.PORT, reload=True)
