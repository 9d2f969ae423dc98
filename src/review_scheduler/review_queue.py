# ABOUTME: Builds the prioritized review queue from a learner's performance history.
# ABOUTME: Deduplicates to the latest record per question, scores, labels, sorts, and truncates.

from __future__ import annotations

import time
from collections import Counter
from typing import Dict, List, Optional, Sequence

from .config import DEFAULT_CONFIG, SchedulerConfig
from .labels import review_label
from .priority import calculate_priority_score
from .schemas import QuestionPerformance, QueueSummary, ReviewLabel, SpacedReviewItem
from .topic_aggregation import build_topic_accuracy_map, percentage


def current_time_ms() -> int:
    return int(time.time() * 1000)


def latest_by_question(performances: Sequence[QuestionPerformance]) -> List[QuestionPerformance]:
    """
    Keep the most recent record per question_id.

    On an exact timestamp tie the first record seen wins. Output follows the
    order in which each question_id first appeared.
    """

    latest: Dict[str, QuestionPerformance] = {}
    for perf in performances:
        existing = latest.get(perf.question_id)
        if existing is None or perf.last_answered_at > existing.last_answered_at:
            latest[perf.question_id] = perf
    return list(latest.values())


def build_review_queue(
    performances: Sequence[QuestionPerformance],
    limit: Optional[int] = None,
    now: Optional[int] = None,
    config: SchedulerConfig = DEFAULT_CONFIG,
) -> List[SpacedReviewItem]:
    """
    Generate the review queue, highest priority first.

    Args:
        performances: Full question performance history, duplicates allowed
        limit: Maximum number of items to return; defaults to config.default_limit
        now: Reference instant in ms since epoch; sampled once when omitted
        config: Scoring weights and thresholds

    Returns:
        SpacedReviewItems with priority_score > 0, sorted by score descending
        and then by last_answered_at ascending
    """

    if limit is None:
        limit = config.default_limit
    if not performances or limit <= 0:
        return []

    topic_accuracy_map = build_topic_accuracy_map(performances)
    if now is None:
        now = current_time_ms()

    items: List[SpacedReviewItem] = []
    for perf in latest_by_question(performances):
        priority_score = calculate_priority_score(perf, topic_accuracy_map, now, config)
        if priority_score <= 0:
            continue

        items.append(
            SpacedReviewItem(
                question_id=perf.question_id,
                quiz_id=perf.quiz_id,
                quiz_title=perf.quiz_title,
                question_text=perf.question_text,
                topic=perf.topic,
                difficulty=perf.difficulty,
                priority_score=priority_score,
                label=review_label(perf, topic_accuracy_map.get(perf.topic), now, config),
                last_answered_at=perf.last_answered_at,
                accuracy=percentage(perf.times_correct, perf.times_answered),
                times_answered=perf.times_answered,
                tags=list(perf.tags),
            )
        )

    # Stable sort: exact ties keep first-seen question order.
    items.sort(key=lambda item: (-item.priority_score, item.last_answered_at))
    return items[:limit]


def summarize_queue(items: Sequence[SpacedReviewItem]) -> QueueSummary:
    counts = Counter(item.label for item in items)
    return QueueSummary(
        total_due=len(items),
        needs_review=counts[ReviewLabel.NEEDS_REVIEW],
        weak_topic=counts[ReviewLabel.WEAK_TOPIC],
        due_for_review=counts[ReviewLabel.DUE_FOR_REVIEW],
    )
