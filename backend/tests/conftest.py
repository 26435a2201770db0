import random

import pytest

from mindmerge.config import Config
from mindmerge.game.directory import RoomDirectory
from mindmerge.realtime.coordinator import GameState, SessionCoordinator
from mindmerge.server import create_app


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SOCKETIO_ASYNC_MODE = "threading"
    TRUST_PROXY_HEADERS = False


class Outbox:
    """Transport stand-in that records every (channel, payload) it is given."""

    def __init__(self):
        self.sent = []

    def __call__(self, channel, payload):
        self.sent.append((channel, payload))

    def to(self, channel):
        return [payload for ch, payload in self.sent if ch == channel]

    def types(self, channel):
        return [payload["type"] for payload in self.to(channel)]

    def last(self, channel, type_=None):
        for payload in reversed(self.to(channel)):
            if type_ is None or payload["type"] == type_:
                return payload
        return None

    def clear(self):
        self.sent.clear()


@pytest.fixture()
def state():
    return GameState(directory=RoomDirectory(rng=random.Random(1234)))


@pytest.fixture()
def outbox():
    return Outbox()


@pytest.fixture()
def coordinator(state, outbox):
    return SessionCoordinator(state, outbox)


@pytest.fixture()
def flask_app():
    app, socketio = create_app(TestConfig)
    return app, socketio


@pytest.fixture()
def sio_factory(flask_app):
    app, socketio = flask_app
    clients = []

    def _make():
        test_client = socketio.test_client(app)
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in clients:
        if test_client.is_connected():
            test_client.disconnect()
