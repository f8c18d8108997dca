"""Unit tests for BodySizeLimitMiddleware."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from whatsapp_rest.api.middleware.body_limit import BodySizeLimitMiddleware


def _app(max_bytes: int) -> FastAPI:
    app = FastAPI()
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=max_bytes)

    @app.post("/echo")
    async def echo(payload: dict):
        return payload

    return app


def test_within_limit_passes():
    client = TestClient(_app(100))
    response = client.post("/echo", json={"a": 1})
    assert response.status_code == 200
    assert response.json() == {"a": 1}


def test_over_limit_is_rejected():
    client = TestClient(_app(10))
    response = client.post("/echo", json={"a": "x" * 50})
    assert response.status_code == 413
    assert response.json() == {"error": "Request body exceeds 10 bytes"}


def _chunks(total: int, size: int = 256):
    sent = 0
    while sent < total:
        step = min(size, total - sent)
        yield b" " * step
        sent += step


def test_chunked_body_over_limit_is_rejected():
    client = TestClient(_app(1024))

    def body():
        yield b'{"a": "'
        yield from _chunks(5 * 1024)
        yield b'"}'

    response = client.post(
        "/echo", content=body(), headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 413
    assert response.json() == {"error": "Request body exceeds 1024 bytes"}


def test_chunked_body_within_limit_passes():
    client = TestClient(_app(1024))

    def body():
        yield b'{"a": '
        yield b"1}"

    response = client.post(
        "/echo", content=body(), headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 200
    assert response.json() == {"a": 1}
