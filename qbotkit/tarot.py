"""Tarot card draws, card meanings and spreads."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Mapping, Protocol, Union

IMAGE_BED = "https://gitcode.net/shudorcl/zbp-tarot/-/raw/master/"
REVERSE_DIR = "Reverse/"
POSITIONS = ("『正位』", "『逆位』")
REASONS = (
    "您抽到的是~\n",
    "锵锵锵，塔罗牌的预言是~\n",
    "诶，让我看看您抽到了~\n",
)
MAJOR_COUNT = 22
MINOR_COUNT = 55
MIXED_COUNT = 77
MAX_DRAW = 20


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


@dataclass(frozen=True)
class Card:
    """One tarot card with its upright and reversed meanings."""

    name: str
    description: str = ""
    reverse_description: str = ""
    img_url: str = ""

    @property
    def image_url(self) -> str:
        return IMAGE_BED + self.img_url

    @property
    def meaning(self) -> str:
        return (
            f"{self.name}的含义是~\n"
            f"『正位』:{self.description}\n"
            f"『逆位』:{self.reverse_description}"
        )


@dataclass(frozen=True)
class Formation:
    """A spread: how many cards and what each position stands for."""

    cards_num: int
    is_cut: bool = False
    represent: list[list[str]] = field(default_factory=list)


@dataclass(frozen=True)
class Draw:
    """A card as it was drawn, upright or reversed."""

    card: Card
    reversed: bool
    reason: str = REASONS[0]
    represent: str = ""

    @property
    def position(self) -> str:
        return POSITIONS[int(self.reversed)]

    @property
    def description(self) -> str:
        return self.card.reverse_description if self.reversed else self.card.description

    @property
    def image_url(self) -> str:
        prefix = REVERSE_DIR if self.reversed else ""
        return IMAGE_BED + prefix + self.card.img_url

    @property
    def image_name(self) -> str:
        return ("Reverse" + self.card.name) if self.reversed else self.card.name

    def message(self) -> str:
        """The announcement sent for a single draw."""
        return (
            f"{self.reason}{self.position}的『{self.card.name}』\n"
            f"其释义为: {self.description}"
        )

    def spread_line(self) -> str:
        """This card's entry in a spread summary."""
        return (
            f"{self.represent}:{self.position}的『{self.card.name}』\n"
            f"其释义为: \n{self.description}\n"
        )


def _card_range(kind: str) -> tuple[int, int]:
    if "小" in kind:
        return MAJOR_COUNT, MINOR_COUNT
    if kind == "混合":
        return 0, MIXED_COUNT
    return 0, MAJOR_COUNT


def _load(data: Union[str, bytes, Mapping]) -> Mapping:
    if isinstance(data, Mapping):
        return data
    return json.loads(data)


class Deck:
    """The 78-card deck keyed by index string, plus the known spreads."""

    def __init__(self, cards: Mapping[str, Card], formations: Mapping[str, Formation]):
        self.cards = dict(cards)
        self.formations = dict(formations)
        self.by_name = {card.name: card for card in self.cards.values()}

    @classmethod
    def from_json(cls, cards_json, formations_json) -> "Deck":
        raw_cards = _load(cards_json)
        cards = {}
        for key, entry in raw_cards.items():
            info = entry.get("info", {})
            cards[key] = Card(
                name=entry.get("name", ""),
                description=info.get("description", ""),
                reverse_description=info.get("reverseDescription", ""),
                img_url=info.get("imgUrl", ""),
            )
        formations = {
            name: Formation(
                cards_num=int(entry.get("cards_num", 0)),
                is_cut=bool(entry.get("is_cut", False)),
                represent=[list(row) for row in entry.get("represent", [])],
            )
            for name, entry in _load(formations_json).items()
        }
        return cls(cards, formations)

    def _card(self, index: int) -> Card:
        return self.cards.get(str(index), Card(name=""))

    def _distinct(self, count: int, start: int, length: int, rng: RandomSource) -> list[int]:
        if count > length:
            raise ValueError("not enough cards to draw from")
        seen: set[int] = set()
        picked = []
        while len(picked) < count:
            j = rng.randrange(length)
            if j in seen:
                continue
            seen.add(j)
            picked.append(j + start)
        return picked

    def draw(self, kind: str, count: int, rng: RandomSource) -> list[Draw]:
        """Draw ``count`` distinct cards of the given kind."""
        if count <= 0:
            raise ValueError("张数必须为正")
        if count > MAX_DRAW:
            raise ValueError("抽取张数过多")
        start, length = _card_range(kind)
        if count == 1:
            index = rng.randrange(length) + start
            reverse = rng.randrange(2) == 1
            reason = REASONS[rng.randrange(len(REASONS))]
            return [Draw(self._card(index), reverse, reason)]
        draws = []
        seen: set[int] = set()
        while len(draws) < count:
            if len(seen) >= length:
                raise ValueError("not enough cards to draw from")
            j = rng.randrange(length)
            if j in seen:
                continue
            seen.add(j)
            reverse = rng.randrange(2) == 1
            reason = REASONS[rng.randrange(len(REASONS))]
            draws.append(Draw(self._card(j + start), reverse, reason))
        return draws

    def interpret(self, name: str) -> Card:
        """Look a card up by name; KeyError when there is no such card."""
        try:
            return self.by_name[name]
        except KeyError:
            raise KeyError(f"没有找到{name}噢~") from None

    def card_list_text(self) -> str:
        """The overview of card names shown when a lookup fails."""
        major = [self._card(i).name for i in range(MAJOR_COUNT)]
        return (
            "塔罗牌列表\n大阿尔卡纳:\n"
            + " ".join(major[:7])
            + "\n"
            + " ".join(major[7:14])
            + "\n"
            + " ".join(major[14:22])
            + "\n小阿尔卡纳:\n[圣杯|星币|宝剑|权杖] [0-10|侍从|骑士|王后|国王]"
        )

    def spread(self, kind: str, formation_name: str, rng: RandomSource) -> list[Draw]:
        """Lay out a named spread; LookupError lists the known spreads."""
        formation = self.formations.get(formation_name)
        if formation is None:
            raise LookupError(
                f"没有找到{formation_name}噢~\n现有牌阵列表: \n"
                + "\n".join(self.formations)
            )
        start, length = _card_range(kind)
        if formation.cards_num > length:
            raise ValueError("not enough cards to draw from")
        represent = formation.represent[0] if formation.represent else []
        draws = []
        seen: set[int] = set()
        for i in range(formation.cards_num):
            j = rng.randrange(length)
            while j in seen:
                j = rng.randrange(length)
            seen.add(j)
            reverse = rng.randrange(2) == 1
            label = represent[i] if i < len(represent) else ""
            draws.append(Draw(self._card(j + start), reverse, represent=label))
        return draws