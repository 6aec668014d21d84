import random
from datetime import datetime

import pytest

from qbotkit.score import (
    RANK_THRESHOLDS,
    SCORE_MAX,
    ScoreDB,
    get_rank,
    hour_word,
    next_rank_score,
    sign_in_reward,
)


@pytest.fixture
def db(tmp_path):
    with ScoreDB(tmp_path / "score.db") as store:
        yield store


def test_get_score_defaults_to_zero(db):
    assert db.get_score(42) == 0


def test_set_score_round_trip(db):
    db.set_score(42, 17)
    db.set_score(42, 18)
    assert db.get_score(42) == 18


def test_sign_in_round_trip(db):
    assert db.get_sign_in(7) == (0, None)
    now = datetime(2022, 12, 1, 8, 30, 0)
    db.set_sign_in_count(7, 1, now)
    assert db.get_sign_in(7) == (1, now)


def test_top_scores_order_and_limit(db):
    for uid, score in [(1, 5), (2, 50), (3, 20)]:
        db.set_score(uid, score)
    assert db.top_scores(2) == [(2, 50), (3, 20)]
    assert len(db.top_scores(10)) == 3


def test_rank_at_thresholds():
    for rank, threshold in enumerate(RANK_THRESHOLDS):
        assert get_rank(threshold) == rank


def test_rank_between_thresholds():
    assert get_rank(15) == get_rank(10)
    assert get_rank(SCORE_MAX) == len(RANK_THRESHOLDS) - 1


def test_rank_outside_table():
    assert get_rank(SCORE_MAX + 1) == -1
    assert get_rank(-1) == -1


@pytest.mark.parametrize(
    "hour, word",
    [(6, "早上好"), (12, "中午好"), (14, "下午好"), (19, "晚上好"), (0, "凌晨好"), (24, "")],
)
def test_hour_word(hour, word):
    assert hour_word(hour) == word


def test_next_rank_score():
    assert next_rank_score(0) == RANK_THRESHOLDS[1]
    assert next_rank_score(10) == SCORE_MAX


def test_sign_in_reward_bounds():
    rng = random.Random(3)
    for rank in range(11):
        for _ in range(50):
            reward = sign_in_reward(rank, rng)
            assert 1 + rank * 5 <= reward <= 10 + rank * 5