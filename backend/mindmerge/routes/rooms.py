from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from ..realtime.broadcast import room_public_state

bp = Blueprint("rooms", __name__)


@bp.get("/rooms/<code>")
def get_room(code: str):
    coordinator = current_app.extensions["mindmerge"]
    with coordinator.lock:
        room = coordinator.directory.get(code)
        if not room:
            return jsonify({"error": "room_not_found"}), 404
        return jsonify(room_public_state(room))
