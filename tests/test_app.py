"""
Tests for the squash application factory.
"""
import pytest
from fastapi.testclient import TestClient

from squash import ConfigurationError, SquashAPI, __version__, create_app, set_compression
from squash import Request, Response


def add_routes(app, body: str):
    @app.get("/")
    async def index():
        return Response(content=body, media_type="text/plain")

    @app.get("/raw")
    async def raw(request: Request):
        set_compression(request, False)
        return Response(content=body, media_type="text/plain")


def test_app_creation():
    """Test that the application can be created."""
    app = create_app(title="squash test")
    assert isinstance(app, SquashAPI)
    assert app.title == "squash test"
    assert app.state.compression_enabled is True
    assert __version__


def test_app_compresses_by_default(string):
    app = create_app()
    add_routes(app, string)
    client = TestClient(app)

    response = client.get("/", headers={"accept-encoding": "gzip"})
    assert response.status_code == 200
    assert response.headers["content-encoding"] == "gzip"
    assert response.text == string

    response = client.get("/raw", headers={"accept-encoding": "gzip"})
    assert "content-encoding" not in response.headers
    assert response.text == string


def test_app_threshold_option(string):
    app = create_app(threshold="1mb")
    add_routes(app, string)

    response = TestClient(app).get("/", headers={"accept-encoding": "gzip"})
    assert "content-encoding" not in response.headers
    assert response.headers["content-length"] == "2048"


def test_app_without_compression(string):
    app = create_app(compression=False)
    add_routes(app, string)

    response = TestClient(app).get("/", headers={"accept-encoding": "gzip"})
    assert "content-encoding" not in response.headers
    assert "vary" not in response.headers


def test_app_rejects_malformed_threshold():
    with pytest.raises(ConfigurationError):
        create_app(threshold="lots")
