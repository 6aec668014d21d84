"""Daily sign-in levels and the score store behind them."""

from __future__ import annotations

import sqlite3
import threading
from datetime import datetime
from typing import Optional, Protocol

SCORE_MAX = 1200
SIGN_IN_MAX = 1
RANK_THRESHOLDS = (0, 10, 20, 50, 100, 200, 350, 550, 750, 1000, 1200)

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS score ("
    "uid INTEGER PRIMARY KEY, score INTEGER NOT NULL DEFAULT 0)",
    "CREATE TABLE IF NOT EXISTS sign_in ("
    "uid INTEGER PRIMARY KEY, count INTEGER NOT NULL DEFAULT 0, updated_at TEXT)",
)


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


class ScoreDB:
    """Levels and sign-in counters per user, stored in SQLite."""

    def __init__(self, path):
        self.db = sqlite3.connect(str(path), check_same_thread=False)
        self.lock = threading.RLock()
        with self.db:
            for statement in _SCHEMA:
                self.db.execute(statement)

    def close(self) -> None:
        with self.lock:
            self.db.close()

    def __enter__(self) -> "ScoreDB":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def get_score(self, uid: int) -> int:
        """Return the user's score, creating an empty record when missing."""
        with self.lock, self.db:
            self.db.execute("INSERT OR IGNORE INTO score (uid, score) VALUES (?, 0)", (uid,))
            (score,) = self.db.execute(
                "SELECT score FROM score WHERE uid = ?", (uid,)
            ).fetchone()
        return score

    def set_score(self, uid: int, score: int) -> None:
        with self.lock, self.db:
            self.db.execute(
                "INSERT INTO score (uid, score) VALUES (?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET score = excluded.score",
                (uid, score),
            )

    def get_sign_in(self, uid: int) -> tuple[int, Optional[datetime]]:
        """Return ``(count, updated_at)``, creating an empty record when missing."""
        with self.lock, self.db:
            self.db.execute(
                "INSERT OR IGNORE INTO sign_in (uid, count, updated_at) VALUES (?, 0, NULL)",
                (uid,),
            )
            count, updated = self.db.execute(
                "SELECT count, updated_at FROM sign_in WHERE uid = ?", (uid,)
            ).fetchone()
        return count, datetime.fromisoformat(updated) if updated else None

    def set_sign_in_count(self, uid: int, count: int, now: datetime) -> None:
        with self.lock, self.db:
            self.db.execute(
                "INSERT INTO sign_in (uid, count, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(uid) DO UPDATE SET count = excluded.count, "
                "updated_at = excluded.updated_at",
                (uid, count, now.isoformat()),
            )

    def top_scores(self, n: int) -> list[tuple[int, int]]:
        """The ``n`` highest ``(uid, score)`` pairs, best first."""
        with self.lock:
            return [
                (uid, score)
                for uid, score in self.db.execute(
                    "SELECT uid, score FROM score ORDER BY score DESC LIMIT ?", (n,)
                )
            ]


def get_rank(count: int) -> int:
    """Level reached with ``count`` points; -1 when outside the table."""
    for rank, threshold in enumerate(RANK_THRESHOLDS):
        if count == threshold:
            return rank
        if count < threshold:
            return rank - 1
    return -1


def hour_word(hour: int) -> str:
    """Greeting for the hour of day."""
    if 6 <= hour < 12:
        return "早上好"
    if 12 <= hour < 14:
        return "中午好"
    if 14 <= hour < 19:
        return "下午好"
    if 19 <= hour < 24:
        return "晚上好"
    if 0 <= hour < 6:
        return "凌晨好"
    return ""


def next_rank_score(rank: int) -> int:
    """Points needed for the level after ``rank``."""
    if rank < len(RANK_THRESHOLDS) - 1:
        return RANK_THRESHOLDS[rank + 1]
    return SCORE_MAX


def sign_in_reward(rank: int, rng: RandomSource) -> int:
    """Coins earned by a sign-in; higher levels earn more."""
    return 1 + rng.randrange(10) + rank * 5