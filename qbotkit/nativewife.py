"""Per-group galleries of local 'wife' pictures with a daily pick."""

from __future__ import annotations

import hashlib
import random
from datetime import date as Date
from pathlib import Path
from typing import Sequence, Union

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_DIGITS[rem])
    return sign + "".join(reversed(digits))


def daily_wife(names: Sequence[str], nickname: str, date: Date) -> str:
    """Pick a name that stays the same for one nickname on one day."""
    if not names:
        raise LookupError("一个wife也没有哦~")
    key = f"{nickname}{date.year}{date.month}{date.day}".encode()
    digest = hashlib.md5(key).digest()
    seed = int.from_bytes(digest[:8], "little", signed=True)
    return names[random.Random(seed).randrange(len(names))]


def sanitize_wife_name(text: str, command: str) -> str:
    """Take the name after ``command``, without spaces or path separators."""
    compact = text.replace(" ", "")
    index = compact.rfind(command)
    if index >= 0:
        compact = compact[index + len(command):]
    return compact.replace("/", "").replace("\\", "")


class WifeGallery:
    """Pictures stored as ``<base>/<group id in base 36>/<name>``."""

    def __init__(self, base: Union[str, Path]):
        self.base = Path(base)

    def _folder(self, gid: int) -> Path:
        return self.base / _base36(gid)

    def wives(self, gid: int) -> list[str]:
        """Names in the group's gallery, sorted; empty when there is none."""
        folder = self._folder(gid)
        if not folder.is_dir():
            return []
        return sorted(entry.name for entry in folder.iterdir())

    def add(self, gid: int, name: str, data: bytes) -> Path:
        """Store a picture under ``name``."""
        if not name:
            raise ValueError("没有找到wife的名字！")
        folder = self._folder(gid)
        folder.mkdir(mode=0o755, parents=True, exist_ok=True)
        path = folder / name
        path.write_bytes(data)
        return path

    def remove(self, gid: int, name: str) -> None:
        """Delete a picture; FileNotFoundError when it is missing."""
        if not name:
            raise ValueError("没有找到wife的名字！")
        (self._folder(gid) / name).unlink()

    def draw(self, gid: int, nickname: str, date: Date) -> tuple[str, Path]:
        """Today's wife for ``nickname``: ``(name, picture path)``."""
        names = self.wives(gid)
        if not names:
            raise LookupError("一个wife也没有哦~")
        name = names[0] if len(names) == 1 else daily_wife(names, nickname, date)
        return name, self._folder(gid) / name