import os
import random
import sys

import pytest
from fastapi.websockets import WebSocketState

# Ensure the backend root (containing the `bingo_server` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from fastapi.testclient import TestClient

from bingo_server.application import create_app
from bingo_server.runtime import BingoRuntime
from bingo_server.runtime_types import ClientConnection


class FakeWebSocket:
    """Records every frame sent to it; behaves like an open Starlette socket."""

    def __init__(self):
        self.sent = []
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED

    async def send_json(self, data):
        self.sent.append(data)

    def close(self):
        self.client_state = WebSocketState.DISCONNECTED
        self.application_state = WebSocketState.DISCONNECTED

    def types(self):
        return [frame['type'] for frame in self.sent]

    def last(self, event_type):
        for frame in reversed(self.sent):
            if frame['type'] == event_type:
                return frame['payload']
        raise AssertionError(f'{event_type} was never sent; got {self.types()}')


@pytest.fixture()
def anyio_backend():
    return 'asyncio'


@pytest.fixture()
def runtime():
    return BingoRuntime(rng=random.Random(1234))


@pytest.fixture()
def make_connection():
    counter = iter(range(1, 10_000))

    def _make():
        return ClientConnection(connection_id=f'conn-{next(counter)}', websocket=FakeWebSocket())

    return _make


@pytest.fixture()
def bingo_app():
    return create_app(rng=random.Random(42))


@pytest.fixture()
def client(bingo_app):
    # Entering the client shares one event loop across all websocket sessions.
    with TestClient(bingo_app) as test_client:
        yield test_client
