from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Callable

from ..game import service
from ..game.clients import ConnectionRegistry
from ..game.directory import RoomDirectory
from ..game.errors import GameError
from ..game.models import Client, Room
from .broadcast import Broadcaster, Transport, room_public_state
from .events import (
    CreateRoom,
    InboundMessage,
    JoinRoom,
    LeaveRoom,
    LockWord,
    PlayAgain,
    SetName,
    StartGame,
    parse_message,
)


logger = logging.getLogger(__name__)


@dataclass
class GameState:
    """All process-wide state: open channels and active rooms."""

    registry: ConnectionRegistry = field(default_factory=ConnectionRegistry)
    directory: RoomDirectory = field(default_factory=RoomDirectory)


class SessionCoordinator:
    """Routes channel events into the game and fans the results back out.

    Every connect, message and disconnect runs under one lock, so a turn's
    mutations and sends finish before the next turn starts.
    """

    def __init__(self, state: GameState, transport: Transport) -> None:
        self.state = state
        self.broadcaster = Broadcaster(transport, state.registry)
        self.lock = RLock()
        self._handlers: dict[type, Callable[[Client, Any], None]] = {
            SetName: self._on_set_name,
            CreateRoom: self._on_create_room,
            JoinRoom: self._on_join_room,
            StartGame: self._on_start_game,
            LockWord: self._on_lock_word,
            PlayAgain: self._on_play_again,
            LeaveRoom: self._on_leave_room,
        }

    @property
    def registry(self) -> ConnectionRegistry:
        return self.state.registry

    @property
    def directory(self) -> RoomDirectory:
        return self.state.directory

    def connect(self, channel: Any) -> Client:
        with self.lock:
            client = self.registry.register(channel)
            logger.info("client %s connected", client.id)
            self.broadcaster.send(channel, {"type": "welcome", "clientId": client.id})
            return client

    def disconnect(self, channel: Any) -> None:
        with self.lock:
            client = self.registry.lookup(channel)
            if client is None:
                return
            self._remove_from_room(client)
            self.registry.unregister(channel)
            logger.info("client %s disconnected", client.id)

    def handle(self, channel: Any, raw: Any) -> None:
        with self.lock:
            client = self.registry.lookup(channel)
            if client is None:
                return
            message = parse_message(raw)
            if message is None:
                logger.debug("ignoring undecodable message from client %s", client.id)
                return
            self.dispatch(client, message)

    def dispatch(self, client: Client, message: InboundMessage) -> None:
        handler = self._handlers.get(type(message))
        if handler is None:
            return
        try:
            handler(client, message)
        except GameError as exc:
            logger.debug("client %s: %s", client.id, exc.code)
            self._reply(client, {"type": "error", "message": exc.message, "code": exc.code})

    def _reply(self, client: Client, payload: dict) -> None:
        self.broadcaster.send(client.channel, payload)

    def _current_room(self, client: Client) -> Room | None:
        room = self.directory.room_of(client)
        if room is None:
            logger.debug("client %s is not in a room", client.id)
        return room

    def _remove_from_room(self, client: Client) -> None:
        remaining = self.directory.remove_client(client)
        if remaining is not None:
            self.broadcaster.room_update(remaining)

    def _on_set_name(self, client: Client, message: SetName) -> None:
        room = self.directory.room_of(client)
        if service.set_name(client, room, message.name):
            self.broadcaster.room_update(room)

    def _on_create_room(self, client: Client, message: CreateRoom) -> None:
        room = self.directory.create_room(client, message.player_count)
        self.broadcaster.room_update(room)
        self._reply(
            client,
            {
                "type": "room_created",
                "room": room_public_state(room),
                "roomCode": room.code,
                "youId": client.id,
            },
        )

    def _on_join_room(self, client: Client, message: JoinRoom) -> None:
        room, changed = self.directory.join_room(client, message.room_code)
        if changed:
            self.broadcaster.room_update(room)
        self._reply(
            client,
            {
                "type": "joined_room",
                "room": room_public_state(room),
                "roomCode": room.code,
                "youId": client.id,
            },
        )

    def _on_start_game(self, client: Client, message: StartGame) -> None:
        room = self._current_room(client)
        if room is None:
            return
        if service.start_game(room, client):
            self.broadcaster.start_next_round(room)

    def _on_lock_word(self, client: Client, message: LockWord) -> None:
        room = self._current_room(client)
        if room is None:
            return
        if not service.lock_word(room, client, message.word):
            return
        self.broadcaster.room_update(room)
        result = service.finish_round(room)
        if result is not None:
            self.broadcaster.round_result(room, result)

    def _on_play_again(self, client: Client, message: PlayAgain) -> None:
        room = self._current_room(client)
        if room is None:
            return
        if service.play_again(room, client):
            self.broadcaster.start_next_round(room)

    def _on_leave_room(self, client: Client, message: LeaveRoom) -> None:
        self._remove_from_room(client)
        self._reply(client, {"type": "left_room"})
