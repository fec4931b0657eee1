"""Shared fixtures: a local aiohttp server standing in for the sites under test."""

import asyncio

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from securitytxt import config

ENDLESS_CHUNKS = 2048
ENDLESS_STATS = web.AppKey("endless_stats", dict)
STALL_SECONDS = 1.0

SECURITY_TXT = (
    "# Our security policy\r\n"
    "Contact: mailto:security@example.com\r\n"
    "Contact: {base}/report\r\n"
    "Expires: 2030-01-01T00:00:00Z\r\n"
    "Encryption: {base}/pgp-key.txt\r\n"
    "Acknowledgments: {base}/hall-of-fame\r\n"
    "Preferred-Languages: en, fr\r\n"
    "Canonical: {base}/.well-known/security.txt\r\n"
    "Policy: {base}/missing-policy\r\n"
    "Hiring: {base}/jobs\r\n"
)

PAGES = {
    "/report": "<html><head><title>Report a Vulnerability</title></head></html>",
    "/hall-of-fame": "<html><head><title>Hall of Fame</title></head></html>",
    "/jobs": "<html><head><title>Jobs &amp; Careers</title></head></html>",
    "/untitled": "<html><body>no title here</body></html>",
}


def padded_body(size: int) -> bytes:
    """A valid security.txt of exactly ``size`` bytes."""
    head = b"Contact: mailto:security@example.com\n#"
    return head + b"x" * (size - len(head))


async def _security_txt(request: web.Request) -> web.Response:
    base = f"{request.scheme}://{request.host}"
    return web.Response(text=SECURITY_TXT.format(base=base), content_type="text/plain")


async def _page(request: web.Request) -> web.Response:
    return web.Response(text=PAGES[request.path], content_type="text/html")


async def _json(request: web.Request) -> web.Response:
    return web.Response(text="Contact: mailto:security@example.com\n", content_type="application/json")


async def _sized(request: web.Request) -> web.Response:
    size = int(request.match_info["size"])
    return web.Response(body=padded_body(size), content_type="text/plain")


async def _streamed(request: web.Request) -> web.StreamResponse:
    """Writes the body in small chunks, splitting a multi-byte character."""
    if request.method == "HEAD":
        return web.Response(content_type="text/plain")
    resp = web.StreamResponse()
    resp.content_type = "text/plain"
    resp.charset = "utf-8"
    await resp.prepare(request)
    data = "Contact: mailto:sécurité@example.com\n".encode("utf-8")
    split = data.index(b"\xc3") + 1
    await resp.write(data[:split])
    await resp.write(data[split:])
    await resp.write_eof()
    return resp


async def _endless(request: web.Request) -> web.StreamResponse:
    """Trickles comment lines until the client hangs up, counting writes."""
    if request.method == "HEAD":
        return web.Response(content_type="text/plain")
    stats = request.app[ENDLESS_STATS]
    resp = web.StreamResponse()
    resp.content_type = "text/plain"
    await resp.prepare(request)
    try:
        for _ in range(ENDLESS_CHUNKS):
            await resp.write(b"# " + b"x" * 510 + b"\n")
            stats["writes"] += 1
            await asyncio.sleep(0.01)
        await resp.write_eof()
    except ConnectionResetError:
        stats["reset"] = True
    return resp


async def _stall(request: web.Request) -> web.Response:
    await asyncio.sleep(STALL_SECONDS)
    return web.Response(text="<title>Too Late</title>", content_type="text/html")


async def _stall_body(request: web.Request) -> web.StreamResponse:
    """Answers HEAD promptly, then stops sending halfway through the GET body."""
    if request.method == "HEAD":
        return web.Response(content_type="text/plain")
    resp = web.StreamResponse()
    resp.content_type = "text/plain"
    await resp.prepare(request)
    await resp.write(b"Contact: mailto:security@example.com\n")
    await asyncio.sleep(STALL_SECONDS)
    try:
        await resp.write_eof()
    except ConnectionResetError:
        pass
    return resp


async def _duplicate(request: web.Request) -> web.Response:
    body = "Contact: mailto:a@example.com\nCanonical: https://a.example/\nCanonical: https://a.example/\n"
    return web.Response(text=body, content_type="text/plain")


def build_app() -> web.Application:
    app = web.Application()
    app.router.add_get("/.well-known/security.txt", _security_txt)
    for path in PAGES:
        app.router.add_get(path, _page)
    app.router.add_get("/json/security.txt", _json)
    app.router.add_get("/sized/{size}", _sized)
    app.router.add_get("/streamed.txt", _streamed)
    app.router.add_get("/endless.txt", _endless)
    app.router.add_get("/duplicate.txt", _duplicate)
    app.router.add_get("/stall", _stall)
    app.router.add_get("/stall-body.txt", _stall_body)
    app[ENDLESS_STATS] = {"writes": 0, "reset": False, "total": ENDLESS_CHUNKS}
    return app


@pytest.fixture
async def server():
    test_server = TestServer(build_app())
    await test_server.start_server()
    yield test_server
    await test_server.close()


@pytest.fixture
async def session():
    async with aiohttp.ClientSession() as client_session:
        yield client_session


@pytest.fixture
def url_for(server):
    def _url_for(path: str) -> str:
        return str(server.make_url(path))
    return _url_for


@pytest.fixture
def endless_stats(server):
    return server.app[ENDLESS_STATS]


@pytest.fixture
def short_timeout(monkeypatch):
    """Cuts the per-request timeout to 100 ms, well under STALL_SECONDS."""
    monkeypatch.setattr(config, "TIMEOUT_LIMIT", 100)
