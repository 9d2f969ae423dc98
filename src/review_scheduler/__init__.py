# ABOUTME: Makes the review scheduler package importable from scripts and tests.
# ABOUTME: Re-exports the schema types and queue-building entrypoints.

from .config import DEFAULT_CONFIG, SchedulerConfig, load_config
from .labels import review_label
from .priority import calculate_priority_score, score_breakdown
from .review_queue import build_review_queue, summarize_queue
from .review_updates import apply_review_result
from .schemas import QuestionPerformance, QuestionStats, ReviewLabel, SpacedReviewItem, TopicAccuracy
from .topic_aggregation import aggregate_by_topic, build_topic_accuracy_map

__all__ = [
    "DEFAULT_CONFIG",
    "SchedulerConfig",
    "load_config",
    "review_label",
    "calculate_priority_score",
    "score_breakdown",
    "build_review_queue",
    "summarize_queue",
    "apply_review_result",
    "QuestionPerformance",
    "QuestionStats",
    "ReviewLabel",
    "SpacedReviewItem",
    "TopicAccuracy",
    "aggregate_by_topic",
    "build_topic_accuracy_map",
]
