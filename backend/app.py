"""WebSecCheck security.txt service - FastAPI backend for security.txt retrieval and enrichment."""

import asyncio
import logging
import time
from typing import Optional
from urllib.parse import urlparse

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, field_validator

from checks import security_txt
from securitytxt.config import LOG_LEVEL
from securitytxt.errors import DuplicateFieldError, SizeExceededError
from securitytxt.models import ParsedEntry
from securitytxt.pipeline import parse_security_txt

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s.%(msecs)03d %(levelname)s %(name)s %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

SCAN_TIMEOUT = 60

app = FastAPI(
    title="WebSecCheck security.txt API",
    description="Fetches, parses and enriches security.txt disclosure policies.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SecurityTxtRequest(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            v = f"https://{v}"
        parsed = urlparse(v)
        if not parsed.hostname:
            raise ValueError("Invalid URL")
        return v


class SecurityTxtResponse(BaseModel):
    url: str
    entries: list[ParsedEntry]


class CheckResult(BaseModel):
    id: str
    name: str
    category: str
    status: str  # pass, warn, fail
    description: str
    details: Optional[dict] = None


class ScanResponse(BaseModel):
    url: str
    hostname: str
    checks: list[CheckResult]
    scan_time_seconds: float


@app.post("/security-txt", response_model=SecurityTxtResponse, response_model_exclude_none=True)
async def security_txt_entries(request: SecurityTxtRequest):
    try:
        entries = await parse_security_txt(request.url)
    except SizeExceededError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except DuplicateFieldError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if entries is None:
        raise HTTPException(status_code=404, detail="No security.txt document could be retrieved.")
    return SecurityTxtResponse(url=request.url, entries=entries)


@app.post("/scan", response_model=ScanResponse)
async def scan(request: SecurityTxtRequest):
    start = time.time()
    url = request.url
    try:
        checks = await asyncio.wait_for(security_txt.run_all(url), timeout=SCAN_TIMEOUT)
    except asyncio.TimeoutError:
        raise HTTPException(status_code=504, detail="Security checks timed out.")

    elapsed = round(time.time() - start, 2)
    logger.info("scanned %s in %ss", url, elapsed)
    return ScanResponse(
        url=url,
        hostname=urlparse(url).hostname,
        checks=[CheckResult(**c) for c in checks],
        scan_time_seconds=elapsed,
    )


@app.get("/")
async def root():
    return {"status": "ok", "service": "WebSecCheck security.txt API", "version": "1.0.0"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
