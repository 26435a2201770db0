from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .models import Room


logger = logging.getLogger(__name__)

MAX_WORD_LENGTH = 32


@dataclass
class RoundResult:
    match: bool
    round: int
    word: str | None = None
    # (player id, raw word) in join order; filled only for a mismatch.
    words: list[tuple[int, str]] = field(default_factory=list)


def normalize_word(word: str) -> str:
    return word.strip().lower()


def clip_word(raw: str) -> str:
    return raw.strip()[:MAX_WORD_LENGTH]


def everyone_locked(room: Room) -> bool:
    return bool(room.players) and all(p.locked for p in room.players)


def resolve_round(room: Room) -> RoundResult:
    """Decide the round once every player has locked a word.

    Comparison uses the normalized words; what gets recorded and announced is
    always the raw submission.
    """
    raw_words = [(p.id, p.locked_word or "") for p in room.players]
    normalized = {normalize_word(w) for _, w in raw_words}
    played_round = room.round

    for p in room.players:
        p.last_word = p.locked_word
        p.locked_word = None

    if len(normalized) == 1:
        room.status = "finished"
        logger.info("room %s matched on round %s", room.code, played_round)
        return RoundResult(match=True, round=played_round, word=raw_words[0][1])

    room.round += 1
    logger.info("room %s mismatched on round %s", room.code, played_round)
    return RoundResult(match=False, round=played_round, words=raw_words)
