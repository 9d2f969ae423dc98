# ABOUTME: Aggregates question performance records into per-topic accuracy.
# ABOUTME: Every historical record counts toward its topic, duplicates included.

from __future__ import annotations

import math
from typing import Dict, List, Sequence

import pandas as pd

from .schemas import QuestionPerformance, TopicAccuracy, resolve_topic


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percentage(correct: float, total: float) -> int:
    """Rounded percentage, 0 when nothing was answered."""
    if total > 0:
        return round_half_up(correct / total * 100)
    return 0


def aggregate_by_topic(performances: Sequence[QuestionPerformance]) -> List[TopicAccuracy]:
    """
    Sum answered/correct counters per topic across all records.

    Records are not deduplicated here: every historical record contributes to
    its topic. Topics come back in first-seen order.
    """

    if not performances:
        return []

    frame = pd.DataFrame(
        {
            "topic": [resolve_topic(p.topic) for p in performances],
            "total": [p.times_answered for p in performances],
            "correct": [p.times_correct for p in performances],
        }
    )
    grouped = frame.groupby("topic", sort=False).agg(correct=("correct", "sum"), total=("total", "sum")).reset_index()

    return [
        TopicAccuracy(
            topic=str(row.topic),
            correct=int(row.correct),
            total=int(row.total),
            accuracy=percentage(row.correct, row.total),
        )
        for row in grouped.itertuples(index=False)
    ]


def build_topic_accuracy_map(performances: Sequence[QuestionPerformance]) -> Dict[str, int]:
    return {ta.topic: ta.accuracy for ta in aggregate_by_topic(performances)}
