"""Daily group marriage registry backed by SQLite."""

from __future__ import annotations

import sqlite3
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, Optional

DAY_FORMAT = "%Y/%m/%d"
TIME_FORMAT = "%H:%M:%S"
MAX_CANDIDATES = 30
NAME_WIDTH_LIMIT = 350

_SETTINGS_TABLE = "updateinfo"
_COOLDOWN_TABLE = "cdsheet"
_FAVOR_TABLE = "favorability"

_BASE_SCHEMA = (
    f"CREATE TABLE IF NOT EXISTS {_SETTINGS_TABLE} ("
    "GID INTEGER PRIMARY KEY, Updatetime TEXT NOT NULL DEFAULT '', "
    "CanMatch INTEGER NOT NULL DEFAULT 1, CanNtr INTEGER NOT NULL DEFAULT 1, "
    "CDtime REAL NOT NULL DEFAULT 12)",
    f"CREATE TABLE IF NOT EXISTS {_COOLDOWN_TABLE} ("
    "Time INTEGER PRIMARY KEY, GroupID INTEGER NOT NULL, "
    "UserID INTEGER NOT NULL, ModeID TEXT NOT NULL)",
    f"CREATE TABLE IF NOT EXISTS {_FAVOR_TABLE} ("
    "Userinfo TEXT PRIMARY KEY, Favor INTEGER NOT NULL DEFAULT 0)",
)


@dataclass
class GroupSettings:
    """Per-group switches and cooldown length in hours."""

    gid: int
    updatetime: str = ""
    can_match: int = 1
    can_ntr: int = 1
    cd_time: float = 12.0


@dataclass(frozen=True)
class Marriage:
    """One entry of a group's roster; ``target == 0`` marks a proud single."""

    user: int
    target: int
    username: str
    targetname: str
    updatetime: str

    @property
    def is_single(self) -> bool:
        return self.target == 0 or self.user == 0


def _group_table(gid: int) -> str:
    return f'"group{int(gid)}"'


class Registry:
    """The marriage office: group settings and the daily rosters."""

    def __init__(self, path):
        self.db = sqlite3.connect(str(path), check_same_thread=False)
        self.lock = threading.RLock()
        self._create_base_tables()

    def _create_base_tables(self) -> None:
        with self.db:
            for statement in _BASE_SCHEMA:
                self.db.execute(statement)

    def _ensure_group(self, gid: int) -> None:
        self.db.execute(
            f"CREATE TABLE IF NOT EXISTS {_group_table(gid)} ("
            "User INTEGER PRIMARY KEY, Target INTEGER NOT NULL, "
            "Username TEXT NOT NULL, Targetname TEXT NOT NULL, "
            "Updatetime TEXT NOT NULL)"
        )

    def close(self) -> None:
        with self.lock:
            self.db.close()

    def __enter__(self) -> "Registry":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _stored_settings(self, gid: int) -> Optional[GroupSettings]:
        row = self.db.execute(
            f"SELECT GID, Updatetime, CanMatch, CanNtr, CDtime FROM {_SETTINGS_TABLE} "
            "WHERE GID = ?",
            (gid,),
        ).fetchone()
        return GroupSettings(*row) if row else None

    def _store_settings(self, settings: GroupSettings) -> None:
        with self.db:
            self.db.execute(
                f"INSERT OR REPLACE INTO {_SETTINGS_TABLE} "
                "(GID, Updatetime, CanMatch, CanNtr, CDtime) VALUES (?, ?, ?, ?, ?)",
                (
                    settings.gid,
                    settings.updatetime,
                    settings.can_match,
                    settings.can_ntr,
                    float(settings.cd_time),
                ),
            )

    def settings(self, gid: int) -> GroupSettings:
        """Return the group's settings, or the defaults when none are stored."""
        with self.lock:
            return self._stored_settings(gid) or GroupSettings(gid=gid)

    def update_settings(self, settings: GroupSettings) -> None:
        with self.lock:
            self._store_settings(settings)

    def open_day(self, gid: int, now: datetime) -> None:
        """Clear the group's roster when the stored day differs from ``now``."""
        with self.lock:
            current = self._stored_settings(gid)
            today = now.strftime(DAY_FORMAT)
            if current is not None and current.updatetime == today:
                return
            settings = current or GroupSettings(gid=gid)
            with self.db:
                self.db.execute(f"DROP TABLE IF EXISTS {_group_table(gid)}")
            settings.gid = gid
            settings.updatetime = today
            self._store_settings(settings)

    def lookup(self, gid: int, uid: int) -> Optional[Marriage]:
        """Find the record where ``uid`` is the spouse or the partner."""
        with self.lock:
            with self.db:
                self._ensure_group(gid)
            query = (
                "SELECT User, Target, Username, Targetname, Updatetime "
                f"FROM {_group_table(gid)} WHERE {{}} = ? LIMIT 1"
            )
            row = self.db.execute(query.format("User"), (uid,)).fetchone()
            if row is None:
                row = self.db.execute(query.format("Target"), (uid,)).fetchone()
            return Marriage(*row) if row else None

    def register(
        self,
        gid: int,
        uid: int,
        target: int,
        username: str,
        targetname: str,
        now: datetime,
    ) -> Marriage:
        record = Marriage(uid, target, username, targetname, now.strftime(TIME_FORMAT))
        with self.lock, self.db:
            self._ensure_group(gid)
            self.db.execute(
                f"INSERT OR REPLACE INTO {_group_table(gid)} "
                "(User, Target, Username, Targetname, Updatetime) VALUES (?, ?, ?, ?, ?)",
                (record.user, record.target, record.username, record.targetname, record.updatetime),
            )
        return record

    def roster(self, gid: int) -> list[Marriage]:
        """Today's couples of the group, singles excluded."""
        with self.lock:
            with self.db:
                self._ensure_group(gid)
            rows = self.db.execute(
                "SELECT User, Target, Username, Targetname, Updatetime "
                f"FROM {_group_table(gid)} GROUP BY User ORDER BY User"
            ).fetchall()
        return [Marriage(*row) for row in rows if row[1] != 0]

    def reset(self, gid: Optional[int] = None) -> None:
        """Drop one group's roster, or every table but favorability when ``gid`` is None."""
        with self.lock, self.db:
            if gid is None:
                names = [
                    name
                    for (name,) in self.db.execute(
                        "SELECT name FROM sqlite_master WHERE type = 'table'"
                    )
                    if name != _FAVOR_TABLE
                ]
                for name in names:
                    quoted = name.replace('"', '""')
                    self.db.execute(f'DROP TABLE "{quoted}"')
                for statement in _BASE_SCHEMA:
                    self.db.execute(statement)
                return
            try:
                self.db.execute(f"DROP TABLE {_group_table(gid)}")
            except sqlite3.OperationalError as exc:
                raise LookupError(f"no roster for group {gid}") from exc
            self.db.execute(f"DELETE FROM {_COOLDOWN_TABLE} WHERE GroupID = ?", (gid,))

    def unmarried(self, gid: int, members: Iterable[tuple[int, int]]) -> list[int]:
        """Pick unregistered users among the 30 most recently active members.

        ``members`` holds ``(user_id, last_sent_time)`` pairs.
        """
        recent = sorted(members, key=lambda member: member[1])[-MAX_CANDIDATES:]
        return [uid for uid, _ in recent if self.lookup(gid, uid) is None]


def truncate_name(
    name: str,
    measure: Callable[[str], float],
    limit: int = NAME_WIDTH_LIMIT,
) -> str:
    """Shorten ``name`` with an ellipsis when its measured width exceeds ``limit``."""
    width = 0
    fitted = 0
    for index, char in enumerate(name):
        width += int(measure(char))
        if width > limit:
            return name[: max(fitted - 1, 0)] + "......"
        fitted = index
    return name