from __future__ import annotations

from flask import Blueprint, current_app, jsonify

bp = Blueprint("health", __name__)


@bp.get("/health")
def health():
    coordinator = current_app.extensions["mindmerge"]
    with coordinator.lock:
        return jsonify(
            {
                "ok": True,
                "rooms": len(coordinator.directory),
                "clients": len(coordinator.registry),
            }
        )
