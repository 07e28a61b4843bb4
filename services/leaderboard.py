# services/leaderboard.py
from __future__ import annotations
from dataclasses import dataclass, asdict, fields
from typing import Callable, Dict, List
import json
import logging
import time

from app import config
from app.errors import StorageError

logger = logging.getLogger(__name__)


@dataclass
class LeaderboardEntry:
    username: str
    score: int
    wpm: float
    accuracy: float
    timestamp: int  # ms since epoch


_ENTRY_FIELDS = {f.name for f in fields(LeaderboardEntry)}


def _now_ms() -> int:
    return int(time.time() * 1000)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_entry(row: dict):
    if not isinstance(row.get("username"), str):
        raise ValueError(f"bad username: {row.get('username')!r}")
    for name in ("score", "wpm", "accuracy"):
        if not _is_number(row.get(name)):
            raise ValueError(f"bad {name}: {row.get(name)!r}")
    ts = row.get("timestamp")
    if not isinstance(ts, int) or isinstance(ts, bool):
        raise ValueError(f"bad timestamp: {ts!r}")


def _entries_from_rows(rows) -> List[LeaderboardEntry]:
    out = []
    for row in rows:
        # ignore extra keys so older or newer records still load
        filtered = {k: v for k, v in row.items() if k in _ENTRY_FIELDS}
        _check_entry(filtered)
        out.append(LeaderboardEntry(**filtered))
    return out


class LeaderboardStore:
    """
    Top scores per language, mirrored to a key/value store under one key.

    The store only needs ``get(key) -> str | None`` and ``set(key, value)``.
    """

    def __init__(
        self,
        store,
        key: str = config.LEADERBOARD_KEY,
        size: int = config.LEADERBOARD_SIZE,
        clock: Callable[[], int] = _now_ms,
    ):
        self.store = store
        self.key = key
        self.size = size
        self._clock = clock
        self.boards: Dict[str, List[LeaderboardEntry]] = {}
        self.load()

    def load(self) -> Dict[str, List[LeaderboardEntry]]:
        self.boards = {}
        try:
            raw = self.store.get(self.key)
        except StorageError as e:
            logger.warning("Leaderboard storage unavailable: %s", e)
            return self.boards
        if not raw:
            return self.boards
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("expected an object keyed by language")
            self.boards = {lang: _entries_from_rows(rows) for lang, rows in data.items()}
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning("Discarding unreadable leaderboard: %s", e)
            self.boards = {}
        return self.boards

    def add_score(self, username: str, language: str, score: int, wpm: float, accuracy: float) -> LeaderboardEntry:
        entry = LeaderboardEntry(
            username=username,
            score=score,
            wpm=wpm,
            accuracy=accuracy,
            timestamp=self._clock(),
        )
        board = self.boards.setdefault(language, [])
        board.append(entry)
        # sorted() is stable, so equal scores keep insertion order
        self.boards[language] = sorted(board, key=lambda e: e.score, reverse=True)[: self.size]
        self._save()
        return entry

    def get_leaderboard(self, language: str) -> List[LeaderboardEntry]:
        return list(self.boards.get(language, ()))

    def languages(self) -> List[str]:
        return [lang for lang, board in self.boards.items() if board]

    def _save(self):
        payload = {lang: [asdict(e) for e in board] for lang, board in self.boards.items()}
        try:
            self.store.set(self.key, json.dumps(payload))
        except StorageError as e:
            logger.warning("Leaderboard not saved: %s", e)
