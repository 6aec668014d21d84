"""Good-night / good-morning tracking per group."""

from __future__ import annotations

import math
import sqlite3
import threading
from datetime import datetime, timedelta

EVENING_START = 21
EVENING_END = 3
MORNING_START = 6
MORNING_END = 12

_TABLE = "sleep_manage"
_SCHEMA = (
    f"CREATE TABLE IF NOT EXISTS {_TABLE} ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT, group_id INTEGER NOT NULL, "
    "user_id INTEGER NOT NULL, sleep_time TEXT NOT NULL)"
)


def _stamp(moment: datetime) -> str:
    return moment.isoformat(sep=" ", timespec="microseconds")


class SleepDB:
    """Last sleep or wake-up time of every user in every group."""

    def __init__(self, path):
        self.db = sqlite3.connect(str(path), check_same_thread=False)
        self.lock = threading.RLock()
        with self.db:
            self.db.execute(_SCHEMA)

    def close(self) -> None:
        with self.lock:
            self.db.close()

    def __enter__(self) -> "SleepDB":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _touch(self, gid: int, uid: int, now: datetime, since: datetime) -> tuple[int, timedelta]:
        with self.lock, self.db:
            row = self.db.execute(
                f"SELECT sleep_time FROM {_TABLE} WHERE group_id = ? AND user_id = ? LIMIT 1",
                (gid, uid),
            ).fetchone()
            if row is None:
                elapsed = timedelta(0)
                self.db.execute(
                    f"INSERT INTO {_TABLE} (group_id, user_id, sleep_time) VALUES (?, ?, ?)",
                    (gid, uid, _stamp(now)),
                )
            else:
                elapsed = now - datetime.fromisoformat(row[0])
                self.db.execute(
                    f"UPDATE {_TABLE} SET sleep_time = ? WHERE group_id = ? AND user_id = ?",
                    (_stamp(now), gid, uid),
                )
            (position,) = self.db.execute(
                f"SELECT COUNT(*) FROM {_TABLE} "
                "WHERE group_id = ? AND sleep_time <= ? AND sleep_time >= ?",
                (gid, _stamp(now), _stamp(since)),
            ).fetchone()
        return position, elapsed

    def sleep(self, gid: int, uid: int, now: datetime) -> tuple[int, timedelta]:
        """Record a good night; return the rank tonight and the time awake."""
        offset = timedelta(minutes=now.minute, seconds=now.second)
        if now.hour >= EVENING_START:
            since = now - timedelta(hours=now.hour - EVENING_START) - offset
        elif now.hour <= EVENING_END:
            since = now - timedelta(hours=EVENING_END + now.hour) - offset
        else:
            since = datetime.min
        return self._touch(gid, uid, now, since)

    def get_up(self, gid: int, uid: int, now: datetime) -> tuple[int, timedelta]:
        """Record a good morning; return the rank today and the time asleep."""
        since = now - timedelta(
            hours=now.hour - MORNING_START, minutes=now.minute, seconds=now.second
        )
        return self._touch(gid, uid, now, since)


def split_duration(seconds) -> tuple[int, int, int]:
    """Split a span in seconds (or a timedelta) into whole hours, minutes and seconds."""
    if isinstance(seconds, timedelta):
        seconds = seconds.total_seconds()
    hours = math.trunc(seconds / 3600)
    minutes = math.trunc((seconds - hours * 3600) / 60)
    secs = math.trunc(seconds - hours * 3600 - minutes * 60)
    return hours, minutes, secs


def is_morning(hour: int) -> bool:
    """Good mornings count from 6 to 12 o'clock."""
    return MORNING_START <= hour <= MORNING_END


def is_evening(hour: int) -> bool:
    """Good nights count from 21 o'clock to 3 o'clock."""
    return hour >= EVENING_START or hour <= EVENING_END