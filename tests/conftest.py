"""Shared test fixtures, including a fake Slack incoming webhook."""

import socket
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, List

import pytest
import requests
from flask import Flask, request
from werkzeug.serving import make_server

WEBHOOK_PATH = "/services/T000/B000/XXXX"


def _find_free_port() -> int:
    """Find a free port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        port: int = s.getsockname()[1]
        return port


def _wait_for_server(url: str, timeout: float = 5.0) -> None:
    """Wait until the server is ready to accept connections."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            requests.get(url, timeout=1)
            return
        except requests.ConnectionError:
            time.sleep(0.1)
    raise RuntimeError(f"Server at {url} did not start within {timeout}s")


@dataclass
class FakeWebhook:
    """Holds the webhook URL, the received posts and the status to answer with."""

    url: str
    status: int = 200
    posts: List[Dict[str, Any]] = field(default_factory=list)


def _create_webhook_app(webhook: FakeWebhook) -> Flask:
    app = Flask(__name__)

    @app.route("/")
    def health() -> str:
        return "ok"

    @app.route(WEBHOOK_PATH, methods=["POST"])
    def incoming_webhook() -> Any:
        webhook.posts.append(
            {
                "content_type": request.content_type,
                "form": request.form.to_dict(),
            }
        )
        if webhook.status != 200:
            return "invalid_payload", webhook.status
        return "ok"

    return app


@pytest.fixture()
def fake_webhook() -> Generator[FakeWebhook, None, None]:
    """Start a fake Slack incoming webhook on a random free port.

    Yields a FakeWebhook whose posts list records every form post received.
    """
    server = None
    try:
        port = _find_free_port()
        base_url = f"http://127.0.0.1:{port}"
        webhook = FakeWebhook(url=base_url + WEBHOOK_PATH)

        server = make_server("127.0.0.1", port, _create_webhook_app(webhook))
        thread = threading.Thread(target=server.serve_forever)
        thread.daemon = True
        thread.start()

        _wait_for_server(base_url)

        yield webhook
    finally:
        if server is not None:
            server.shutdown()
