"""
In-memory ASGI harness.

Lets the interceptor be exercised without a server or test client.
"""

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class CapturedResponse:
    """Everything the interceptor sent for one request."""

    messages: list[dict[str, Any]] = field(default_factory=list)

    @property
    def status(self) -> Optional[int]:
        for message in self.messages:
            if message["type"] == "http.response.start":
                return message["status"]
        return None

    @property
    def headers(self) -> dict[str, str]:
        for message in self.messages:
            if message["type"] == "http.response.start":
                return {
                    key.decode("latin-1").lower(): value.decode("latin-1")
                    for key, value in message["headers"]
                }
        return {}

    @property
    def text(self) -> str:
        return b"".join(
            message.get("body", b"")
            for message in self.messages
            if message["type"] == "http.response.body"
        ).decode("utf-8")

    def json(self) -> Any:
        return json.loads(self.text)


def http_scope(path: str = "/orders/7", query_string: bytes = b"") -> dict[str, Any]:
    """Build a minimal HTTP connection scope."""
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query_string,
        "root_path": "",
        "headers": [],
        "server": ("testserver", 80),
        "client": ("testclient", 50000),
    }


def run_asgi(app, scope: Optional[dict[str, Any]] = None) -> CapturedResponse:
    """Call an ASGI app once and capture what it sends."""
    captured = CapturedResponse()

    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": b"", "more_body": False}

    async def send(message: dict[str, Any]) -> None:
        captured.messages.append(message)

    asyncio.run(app(scope or http_scope(), receive, send))
    return captured


def raising_app(exc: BaseException):
    """ASGI app that fails before sending anything."""

    async def app(scope, receive, send) -> None:
        raise exc

    return app
