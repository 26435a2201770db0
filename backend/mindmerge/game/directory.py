from __future__ import annotations

import logging
import random

from .errors import AlreadyInOtherRoom, AlreadyInRoom, InvalidPlayerCount, RoomFull, RoomNotFound
from .models import Client, Player, Room


logger = logging.getLogger(__name__)

ROOM_CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
ROOM_CODE_LENGTH = 5
ALLOWED_PLAYER_COUNTS = (2, 3, 4)


def normalize_room_code(raw: str) -> str:
    return (raw or "").strip().upper()


class RoomDirectory:
    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.SystemRandom()
        self._rooms: dict[str, Room] = {}

    def get(self, code: str | None) -> Room | None:
        if not code:
            return None
        return self._rooms.get(normalize_room_code(code))

    def room_of(self, client: Client) -> Room | None:
        return self.get(client.room_code)

    def list_rooms(self) -> list[Room]:
        return list(self._rooms.values())

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and normalize_room_code(code) in self._rooms

    def generate_code(self) -> str:
        code = self._random_code()
        while code in self._rooms:
            code = self._random_code()
        return code

    def _random_code(self) -> str:
        return "".join(self._rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))

    def create_room(self, requester: Client, target_player_count: int | None) -> Room:
        if target_player_count not in ALLOWED_PLAYER_COUNTS:
            raise InvalidPlayerCount()
        if requester.room_code:
            raise AlreadyInRoom()

        room = Room(
            code=self.generate_code(),
            host_id=requester.id,
            target_player_count=target_player_count,
        )
        self._rooms[room.code] = room
        self._add_player(room, requester)
        logger.info("room %s created by client %s (target %s)", room.code, requester.id, target_player_count)
        return room

    def join_room(self, client: Client, code: str) -> tuple[Room, bool]:
        """Add ``client`` to the room named ``code``.

        Returns the room and whether membership changed; re-joining the room the
        client is already in changes nothing, as long as the room has space.
        """
        room = self.get(code)
        if room is None:
            raise RoomNotFound()
        if client.room_code and client.room_code != room.code:
            raise AlreadyInOtherRoom()
        if room.is_full:
            raise RoomFull()
        if room.has_player(client.id):
            return room, False

        self._add_player(room, client)
        return room, True

    def remove_client(self, client: Client) -> Room | None:
        """Drop ``client`` from its current room.

        Returns the room when members remain (they need a fresh snapshot), or None
        when there was nothing to leave or the room was deleted.
        """
        code = client.room_code
        client.room_code = None
        room = self.get(code)
        if room is None:
            return None

        room.players = [p for p in room.players if p.id != client.id]

        if not room.players:
            del self._rooms[room.code]
            logger.info("room %s deleted", room.code)
            return None

        if room.host_id == client.id:
            # Players keep join order, so the head is the earliest remaining joiner.
            room.host_id = room.players[0].id
            logger.info("room %s host passed to client %s", room.code, room.host_id)
        return room

    def _add_player(self, room: Room, client: Client) -> Player:
        existing = room.get_player(client.id)
        if existing is not None:
            return existing

        player = Player(
            id=client.id,
            name=client.display_name or f"Player {len(room.players) + 1}",
            channel=client.channel,
        )
        room.players.append(player)
        client.room_code = room.code
        return player
