from __future__ import annotations

from typing import Any, Callable

from ..game.clients import ConnectionRegistry
from ..game.models import Room
from ..game.rounds import RoundResult


Transport = Callable[[Any, dict], None]


def room_public_state(room: Room) -> dict:
    # Locked words stay secret until the round resolves; only the flag goes out.
    return {
        "code": room.code,
        "hostId": room.host_id,
        "status": room.status,
        "round": room.round,
        "targetPlayerCount": room.target_player_count,
        "players": [
            {
                "id": p.id,
                "name": p.name,
                "locked": p.locked,
                "lastWord": p.last_word,
            }
            for p in room.players
        ],
    }


def round_result_payload(room: Room, result: RoundResult) -> dict:
    payload: dict[str, Any] = {"type": "round_result", "match": result.match}
    if result.match:
        payload["word"] = result.word
    else:
        payload["words"] = [{"id": pid, "word": word} for pid, word in result.words]
    payload["room"] = room_public_state(room)
    return payload


class Broadcaster:
    """Pushes events to channels that are still open; anything else is dropped."""

    def __init__(self, transport: Transport, registry: ConnectionRegistry) -> None:
        self._transport = transport
        self._registry = registry

    def send(self, channel: Any, payload: dict) -> None:
        if not self._registry.is_open(channel):
            return
        self._transport(channel, payload)

    def broadcast(self, room: Room, payload: dict) -> None:
        # Per-sid sends rather than a Socket.IO room, so each target passes the open-channel check.
        for p in list(room.players):
            self.send(p.channel, payload)

    def room_update(self, room: Room) -> None:
        self.broadcast(room, {"type": "room_update", "room": room_public_state(room)})

    def start_next_round(self, room: Room) -> None:
        self.broadcast(room, {"type": "start_next_round", "room": room_public_state(room)})

    def round_result(self, room: Room, result: RoundResult) -> None:
        self.broadcast(room, round_result_payload(room, result))
