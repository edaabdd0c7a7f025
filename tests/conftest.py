"""
Pytest configuration and fixtures for squash tests.
"""
import os
from pathlib import Path
from typing import Callable, Iterator

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response, StreamingResponse
from fastapi.testclient import TestClient

from squash import CompressionMiddleware, set_compression

BUFFER = os.urandom(1024)
STRING = BUFFER.hex()


def _iter_file(path: Path, chunk_size: int = 1024) -> Iterator[bytes]:
    with open(path, "rb") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            yield chunk


@pytest.fixture
def buffer() -> bytes:
    """1024 random bytes."""
    return BUFFER


@pytest.fixture
def string() -> str:
    """2048 character text body."""
    return STRING


@pytest.fixture
def asset(tmp_path: Path) -> Path:
    """A script file large enough to be compressed."""
    path = tmp_path / "bundle.js"
    path.write_bytes(b"".join(b"console.log(%d);\n" % i for i in range(2000)))
    return path


@pytest.fixture
def make_client(asset: Path) -> Callable[..., TestClient]:
    """Build a test client for an app wrapped in CompressionMiddleware."""

    def factory(**options) -> TestClient:
        app = FastAPI()
        app.add_middleware(CompressionMiddleware, **options)

        @app.api_route("/string", methods=["GET", "HEAD"])
        async def send_string():
            return PlainTextResponse(STRING)

        @app.get("/buffer")
        async def send_buffer():
            return Response(content=BUFFER)

        @app.get("/buffer/force")
        async def send_forced_buffer(request: Request):
            set_compression(request, True)
            return Response(content=BUFFER)

        @app.get("/string/suppress")
        async def send_suppressed_string(request: Request):
            set_compression(request, False)
            return PlainTextResponse(STRING)

        @app.get("/stream")
        async def send_stream():
            return StreamingResponse(_iter_file(asset), media_type="application/javascript")

        @app.get("/json")
        async def send_json():
            return JSONResponse({"items": [STRING, STRING]})

        @app.get("/no-content")
        async def send_no_content():
            return Response(status_code=204)

        @app.get("/not-modified")
        async def send_not_modified():
            return Response(status_code=304, headers={"content-type": "text/plain"})

        return TestClient(app)

    return factory


@pytest.fixture
def client(make_client) -> TestClient:
    """Test client with the default compression options."""
    return make_client()
