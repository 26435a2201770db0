from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal


RoomStatus = Literal["lobby", "playing", "finished"]


@dataclass
class Client:
    id: int
    channel: Any
    display_name: str | None = None
    # Rooms are looked up by code through the directory, never held directly.
    room_code: str | None = None


@dataclass
class Player:
    id: int
    name: str
    channel: Any
    locked_word: str | None = None
    last_word: str | None = None

    @property
    def locked(self) -> bool:
        return bool(self.locked_word)


@dataclass
class Room:
    code: str
    host_id: int
    target_player_count: int
    status: RoomStatus = "lobby"
    round: int = 1
    players: list[Player] = field(default_factory=list)

    def get_player(self, player_id: int) -> Player | None:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def has_player(self, player_id: int) -> bool:
        return self.get_player(player_id) is not None

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.target_player_count
