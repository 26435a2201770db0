from __future__ import annotations


class GameError(Exception):
    """Base for every error reported back to the requesting client.

    ``code`` is a stable machine identifier, ``message`` is shown to the player.
    """

    code = "game_error"
    message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidPlayerCount(GameError):
    code = "invalid_player_count"
    message = "Invalid player count."


class AlreadyInRoom(GameError):
    code = "already_in_room"
    message = "You are already in a room."


class AlreadyInOtherRoom(GameError):
    code = "already_in_other_room"
    message = "You are already in another room."


class RoomNotFound(GameError):
    code = "room_not_found"
    message = "Room not found."


class RoomFull(GameError):
    code = "room_full"
    message = "Room is full."


class NotHost(GameError):
    code = "only_host"
    message = "Only the host can do that."


class NotEnoughPlayers(GameError):
    code = "not_enough_players"
    message = "Wait for all players to join."
