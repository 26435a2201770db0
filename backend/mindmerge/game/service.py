from __future__ import annotations

import logging

from .errors import NotEnoughPlayers, NotHost
from .models import Client, Room
from .rounds import RoundResult, clip_word, everyone_locked, resolve_round


logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 24


def sanitize_name(raw: object, client_id: int) -> str:
    name = raw.strip()[:MAX_NAME_LENGTH] if isinstance(raw, str) else ""
    return name or f"Player {client_id}"


def set_name(client: Client, room: Room | None, raw_name: object) -> bool:
    """Rename ``client``; returns True when ``room`` changed and needs a snapshot."""
    client.display_name = sanitize_name(raw_name, client.id)

    if room is None:
        return False
    player = room.get_player(client.id)
    if player is None:
        return False
    player.name = client.display_name
    return True


def reset_room(room: Room) -> None:
    room.status = "playing"
    room.round = 1
    for p in room.players:
        p.locked_word = None
        p.last_word = None


def _require_host(room: Room, client: Client, message: str) -> None:
    if room.host_id != client.id:
        raise NotHost(message)


def start_game(room: Room, client: Client) -> bool:
    _require_host(room, client, "Only the host can start the game.")
    if room.status != "lobby":
        logger.debug("room %s: start ignored in status %s", room.code, room.status)
        return False
    if len(room.players) != room.target_player_count:
        raise NotEnoughPlayers()

    reset_room(room)
    logger.info("room %s started with %s players", room.code, len(room.players))
    return True


def play_again(room: Room, client: Client) -> bool:
    _require_host(room, client, "Only the host can start the next round.")
    if room.status != "finished":
        logger.debug("room %s: play again ignored in status %s", room.code, room.status)
        return False

    reset_room(room)
    logger.info("room %s restarted", room.code)
    return True


def lock_word(room: Room, client: Client, raw_word: object) -> bool:
    """Record ``client``'s word for the current round; False when ignored."""
    if room.status != "playing":
        logger.debug("room %s: lock from client %s ignored in status %s", room.code, client.id, room.status)
        return False
    player = room.get_player(client.id)
    if player is None:
        logger.debug("room %s: lock from non-member client %s ignored", room.code, client.id)
        return False
    word = clip_word(raw_word) if isinstance(raw_word, str) else ""
    if not word:
        logger.debug("room %s: empty lock from client %s ignored", room.code, client.id)
        return False

    player.locked_word = word
    return True


def finish_round(room: Room) -> RoundResult | None:
    """Resolve the round once every player has locked; None while words are missing."""
    if room.status != "playing" or not everyone_locked(room):
        return None
    return resolve_round(room)
