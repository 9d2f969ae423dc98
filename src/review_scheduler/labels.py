# ABOUTME: Classifies why a question is due for review.
# ABOUTME: Labels follow a fixed precedence independent of the numeric priority score.

from __future__ import annotations

from typing import Optional

from .config import DEFAULT_CONFIG, SchedulerConfig
from .priority import is_weak_topic
from .schemas import QuestionPerformance, ReviewLabel


def review_label(
    perf: QuestionPerformance,
    topic_accuracy: Optional[float],
    now: Optional[int] = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> str:
    """
    Pick the review label for a question, first match wins:

    - latest answer wrong -> "Needs Review"
    - topic accuracy known and weak -> "Weak Topic"
    - otherwise -> "Due for Review"

    ``now`` is accepted alongside the scorer's arguments; "Due for Review" is
    the fallback bucket and does not itself check elapsed time.
    """

    if not perf.is_correct:
        return ReviewLabel.NEEDS_REVIEW
    if is_weak_topic(topic_accuracy, config):
        return ReviewLabel.WEAK_TOPIC
    return ReviewLabel.DUE_FOR_REVIEW
