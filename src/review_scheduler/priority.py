# ABOUTME: Scores how urgently a question needs review from its recorded performance.
# ABOUTME: Additive signals for wrong answers, weak topics, staleness, guessing, and low accuracy.

from __future__ import annotations

from typing import Dict, Mapping, Optional

from .config import DEFAULT_CONFIG, SchedulerConfig
from .schemas import QuestionPerformance

MS_PER_DAY = 1000 * 60 * 60 * 24


class Signal:
    INCORRECT_ANSWER = "incorrect_answer"
    WEAK_TOPIC = "weak_topic"
    TIME_DECAY = "time_decay"
    FAST_GUESS = "fast_guess"
    FEW_ATTEMPTS = "few_attempts"
    LOW_ACCURACY = "low_accuracy"


def question_accuracy(perf: QuestionPerformance) -> float:
    """Unrounded accuracy in percent; 0 when the question was never answered."""
    if perf.times_answered > 0:
        return perf.times_correct / perf.times_answered * 100
    return 0.0


def is_weak_topic(topic_accuracy: Optional[float], config: SchedulerConfig = DEFAULT_CONFIG) -> bool:
    # Unknown topics are neutral, not weak.
    return topic_accuracy is not None and topic_accuracy < config.thresholds.weak_topic_accuracy


def score_breakdown(
    perf: QuestionPerformance,
    topic_accuracy_map: Mapping[str, float],
    now: int,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> Dict[str, int]:
    """
    Return the signals that fired for this question and the points each contributes.

    Signals are evaluated independently; the priority score is their sum.
    """

    weights = config.weights
    thresholds = config.thresholds
    fired: Dict[str, int] = {}

    if not perf.is_correct:
        fired[Signal.INCORRECT_ANSWER] = weights.incorrect_answer

    if is_weak_topic(topic_accuracy_map.get(perf.topic), config):
        fired[Signal.WEAK_TOPIC] = weights.weak_topic

    days_since_attempt = (now - perf.last_answered_at) / MS_PER_DAY
    if days_since_attempt > thresholds.stale_after_days:
        fired[Signal.TIME_DECAY] = weights.time_decay

    # A response time of 0 means it was not recorded.
    if 0 < perf.response_time < thresholds.fast_guess_seconds:
        fired[Signal.FAST_GUESS] = weights.fast_guess

    if perf.times_answered < thresholds.min_attempts:
        fired[Signal.FEW_ATTEMPTS] = weights.few_attempts

    if question_accuracy(perf) < thresholds.low_accuracy_pct:
        fired[Signal.LOW_ACCURACY] = weights.low_accuracy

    return fired


def calculate_priority_score(
    perf: QuestionPerformance,
    topic_accuracy_map: Mapping[str, float],
    now: int,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> int:
    """Higher score = more urgently needs review."""
    return int(sum(score_breakdown(perf, topic_accuracy_map, now, config).values()))
