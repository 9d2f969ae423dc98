# ABOUTME: Tests the additive priority score for individual questions.
# ABOUTME: Covers each urgency signal in isolation and the combined maximum.

import pytest

from src.review_scheduler.config import SchedulerConfig, ScoreWeights
from src.review_scheduler.priority import (
    MS_PER_DAY,
    Signal,
    calculate_priority_score,
    question_accuracy,
    score_breakdown,
)
from src.review_scheduler.schemas import QuestionPerformance

NOW = 1_700_000_000_000


def _perf(**overrides) -> QuestionPerformance:
    # Baseline fires no signal: correct, fresh, practiced, accurate, slow answer.
    fields = dict(
        question_id="q1",
        is_correct=True,
        last_answered_at=NOW,
        times_answered=10,
        times_correct=9,
        topic="algebra",
        response_time=12.0,
    )
    fields.update(overrides)
    return QuestionPerformance(**fields)


STRONG = {"algebra": 90}


def test_baseline_scores_zero():
    assert calculate_priority_score(_perf(), STRONG, NOW) == 0
    assert score_breakdown(_perf(), STRONG, NOW) == {}


@pytest.mark.parametrize(
    "overrides, topic_map, signal, points",
    [
        ({"is_correct": False}, STRONG, Signal.INCORRECT_ANSWER, 50),
        ({}, {"algebra": 69}, Signal.WEAK_TOPIC, 30),
        ({"last_answered_at": NOW - 4 * MS_PER_DAY}, STRONG, Signal.TIME_DECAY, 20),
        ({"response_time": 2.5}, STRONG, Signal.FAST_GUESS, 10),
        ({"times_answered": 2, "times_correct": 2}, STRONG, Signal.FEW_ATTEMPTS, 15),
        ({"times_answered": 10, "times_correct": 4}, STRONG, Signal.LOW_ACCURACY, 25),
    ],
)
def test_each_signal_contributes_its_weight(overrides, topic_map, signal, points):
    breakdown = score_breakdown(_perf(**overrides), topic_map, NOW)
    assert breakdown == {signal: points}
    assert calculate_priority_score(_perf(**overrides), topic_map, NOW) == points


def test_boundaries_do_not_fire():
    assert calculate_priority_score(_perf(), {"algebra": 70}, NOW) == 0
    assert calculate_priority_score(_perf(last_answered_at=NOW - 3 * MS_PER_DAY), STRONG, NOW) == 0
    assert calculate_priority_score(_perf(response_time=3.0), STRONG, NOW) == 0
    assert calculate_priority_score(_perf(times_answered=3, times_correct=3), STRONG, NOW) == 0
    assert calculate_priority_score(_perf(times_answered=10, times_correct=5), STRONG, NOW) == 0


def test_unknown_response_time_is_not_a_guess():
    assert calculate_priority_score(_perf(response_time=0.0), STRONG, NOW) == 0


def test_unknown_topic_is_neutral():
    assert calculate_priority_score(_perf(topic="chemistry"), STRONG, NOW) == 0


def test_blank_topic_is_not_matched_to_general():
    assert calculate_priority_score(_perf(topic=""), {"General": 40}, NOW) == 0


def test_never_answered_counts_as_zero_accuracy():
    perf = _perf(times_answered=0, times_correct=0)
    assert question_accuracy(perf) == 0.0
    assert score_breakdown(perf, STRONG, NOW) == {Signal.FEW_ATTEMPTS: 15, Signal.LOW_ACCURACY: 25}


def test_all_signals_sum_to_maximum():
    perf = _perf(
        is_correct=False,
        last_answered_at=NOW - 10 * MS_PER_DAY,
        response_time=1.0,
        times_answered=2,
        times_correct=0,
    )
    assert calculate_priority_score(perf, {"algebra": 20}, NOW) == 150


def test_custom_weights_are_applied():
    config = SchedulerConfig(weights=ScoreWeights(incorrect_answer=5))
    assert calculate_priority_score(_perf(is_correct=False), STRONG, NOW, config) == 5


def test_first_wrong_attempt_on_unscored_topic():
    perf = _perf(is_correct=False, times_answered=1, times_correct=0, topic="unseen")
    assert calculate_priority_score(perf, {}, NOW) == 90


@pytest.mark.parametrize(
    "overrides, expected",
    [
        ({"times_answered": 2, "times_correct": 5}, {Signal.FEW_ATTEMPTS: 15}),
        ({"times_answered": -1, "times_correct": 0}, {Signal.FEW_ATTEMPTS: 15, Signal.LOW_ACCURACY: 25}),
        ({"times_answered": 10, "times_correct": -3}, {Signal.LOW_ACCURACY: 25}),
        ({"response_time": -2.0}, {}),
        ({"last_answered_at": NOW + 5 * MS_PER_DAY}, {}),
    ],
)
def test_malformed_records_score_without_clamping(overrides, expected):
    perf = _perf(**overrides)

    first = score_breakdown(perf, STRONG, NOW)
    second = score_breakdown(perf, STRONG, NOW)

    assert first == expected
    assert first == second
    assert calculate_priority_score(perf, STRONG, NOW) == sum(expected.values())
