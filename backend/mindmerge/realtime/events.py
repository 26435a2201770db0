from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class SetName:
    name: str


@dataclass(frozen=True)
class CreateRoom:
    # None when the payload did not carry a usable integer.
    player_count: int | None


@dataclass(frozen=True)
class JoinRoom:
    room_code: str


@dataclass(frozen=True)
class StartGame:
    pass


@dataclass(frozen=True)
class LockWord:
    word: str


@dataclass(frozen=True)
class PlayAgain:
    pass


@dataclass(frozen=True)
class LeaveRoom:
    pass


InboundMessage = Union[SetName, CreateRoom, JoinRoom, StartGame, LockWord, PlayAgain, LeaveRoom]


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _player_count(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


_PARSERS = {
    "set_name": lambda d: SetName(name=_text(d.get("name"))),
    "create_room": lambda d: CreateRoom(player_count=_player_count(d.get("playerCount"))),
    "join_room": lambda d: JoinRoom(room_code=_text(d.get("roomCode"))),
    "start_game": lambda d: StartGame(),
    "lock_word": lambda d: LockWord(word=_text(d.get("word"))),
    "play_again": lambda d: PlayAgain(),
    "leave_room": lambda d: LeaveRoom(),
}


def parse_message(raw: Any) -> InboundMessage | None:
    """Decode one inbound payload; None for anything undecodable or unknown."""
    data = raw
    if isinstance(data, (bytes, bytearray)):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError:
            return None
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except ValueError:
            return None
    if not isinstance(data, dict):
        return None

    msg_type = data.get("type")
    if not isinstance(msg_type, str):
        return None
    parser = _PARSERS.get(msg_type)
    if parser is None:
        return None
    return parser(data)
