# ABOUTME: Folds a submitted review answer back into per-question counters.
# ABOUTME: Returns fresh stats so the next queue build sees the updated history.

from __future__ import annotations

from typing import Optional

from .schemas import QuestionStats


def apply_review_result(
    stats: Optional[QuestionStats],
    question_id: str,
    is_correct: bool,
    response_time: float,
    now: int,
) -> QuestionStats:
    """
    Record one answer.

    Counters increment, the streak resets on a wrong answer, and the average
    response time is a running mean over all answers. ``stats=None`` starts a
    new record for ``question_id``.
    """

    response_time = response_time or 0.0
    if stats is None:
        return QuestionStats(
            question_id=question_id,
            times_answered=1,
            times_correct=1 if is_correct else 0,
            streak=1 if is_correct else 0,
            average_response_time=float(response_time),
            last_answered_at=now,
        )

    times_answered = stats.times_answered + 1
    average = (stats.average_response_time * stats.times_answered + response_time) / times_answered
    return QuestionStats(
        question_id=stats.question_id,
        times_answered=times_answered,
        times_correct=stats.times_correct + (1 if is_correct else 0),
        streak=stats.streak + 1 if is_correct else 0,
        average_response_time=float(average),
        last_answered_at=now,
    )
