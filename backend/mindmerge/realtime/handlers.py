from __future__ import annotations

from flask import request
from flask_socketio import SocketIO

from .coordinator import GameState, SessionCoordinator


MESSAGE_EVENT = "message"


def register_socketio_handlers(socketio: SocketIO, state: GameState | None = None) -> SessionCoordinator:
    def _transport(sid, payload: dict) -> None:
        socketio.emit(MESSAGE_EVENT, payload, to=sid)

    coordinator = SessionCoordinator(state or GameState(), _transport)

    @socketio.on("connect")
    def on_connect(auth=None):
        coordinator.connect(request.sid)

    @socketio.on(MESSAGE_EVENT)
    def on_message(data):
        coordinator.handle(request.sid, data)

    @socketio.on("disconnect")
    def on_disconnect(reason=None):
        coordinator.disconnect(request.sid)

    return coordinator
