import json
import random

import pytest

from qbotkit.reborn import GENDERS, WeightedChooser, area_chooser, load_rates, reborn


class FixedRng:
    def __init__(self, values):
        self.values = list(values)

    def randrange(self, stop):
        value = self.values.pop(0)
        assert 0 <= value < stop
        return value


def test_single_choice_always_picked():
    chooser = WeightedChooser([("only", 5)])
    rng = random.Random(1)
    assert {chooser.pick(rng) for _ in range(20)} == {"only"}


def test_zero_weight_never_picked():
    chooser = WeightedChooser([("never", 0), ("always", 3)])
    rng = random.Random(2)
    assert {chooser.pick(rng) for _ in range(50)} == {"always"}


def test_empty_choices_rejected():
    with pytest.raises(ValueError):
        WeightedChooser([])
    with pytest.raises(ValueError):
        WeightedChooser([("a", 0)])


def test_negative_weight_rejected():
    with pytest.raises(ValueError):
        WeightedChooser([("a", -1), ("b", 5)])


def test_pick_boundaries():
    chooser = WeightedChooser([("a", 1), ("b", 2)])
    assert chooser.pick(FixedRng([0])) == "a"
    assert chooser.pick(FixedRng([1])) == "b"
    assert chooser.pick(FixedRng([2])) == "b"


def test_load_rates_and_chooser(tmp_path):
    path = tmp_path / "rate.json"
    path.write_text(
        json.dumps([{"name": "甲", "weight": 0.5}, {"name": "乙", "weight": 0.0}]),
        encoding="utf-8",
    )
    rates = load_rates(path)
    assert rates == [("甲", 0.5), ("乙", 0.0)]
    chooser = area_chooser(rates)
    assert chooser.pick(random.Random(0)) == "甲"


def test_reborn_success_mentions_area_and_gender():
    areas = WeightedChooser([("某地", 1)])
    message = reborn(areas, FixedRng([(1 << 27) + 1, 0, 0]))
    assert message.startswith("投胎成功！")
    assert "某地" in message
    assert GENDERS.items[0] in message


def test_reborn_failure():
    areas = WeightedChooser([("某地", 1)])
    assert reborn(areas, FixedRng([1 << 27])) == "投胎失败！\n您没能活到出生，祝您下次好运！"