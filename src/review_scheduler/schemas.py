# ABOUTME: Defines the data structures flowing through the review scheduler.
# ABOUTME: Centralizes question performance, topic accuracy, and queue item schemas.

from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_TOPIC = "General"


class ReviewLabel:
    NEEDS_REVIEW = "Needs Review"
    WEAK_TOPIC = "Weak Topic"
    DUE_FOR_REVIEW = "Due for Review"

    ALL = (NEEDS_REVIEW, WEAK_TOPIC, DUE_FOR_REVIEW)


def resolve_topic(topic: Optional[str]) -> str:
    """Missing or blank topics are grouped under ``DEFAULT_TOPIC``."""
    if topic is None:
        return DEFAULT_TOPIC
    topic = str(topic).strip()
    return topic or DEFAULT_TOPIC


@dataclass(frozen=True)
class QuestionPerformance:
    """Recorded performance for one question, as supplied by the attempt log."""

    question_id: str
    is_correct: bool
    last_answered_at: int  # ms since epoch
    times_answered: int
    times_correct: int
    quiz_id: str = ""
    quiz_title: str = ""
    question_text: str = ""
    topic: str = DEFAULT_TOPIC
    difficulty: float = 0.0
    response_time: float = 0.0  # seconds, 0 means unknown
    tags: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class TopicAccuracy:
    topic: str
    correct: int
    total: int
    accuracy: int


@dataclass(frozen=True)
class SpacedReviewItem:
    """Queue entry emitted for a question that needs review."""

    question_id: str
    quiz_id: str
    quiz_title: str
    question_text: str
    topic: str
    difficulty: float
    priority_score: int
    label: str
    last_answered_at: int
    accuracy: int  # 0-100 for this question
    times_answered: int
    tags: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class QuestionStats:
    """Running per-question counters updated after each review answer."""

    question_id: str
    times_answered: int = 0
    times_correct: int = 0
    streak: int = 0
    average_response_time: float = 0.0
    last_answered_at: Optional[int] = None


@dataclass(frozen=True)
class QueueSummary:
    total_due: int
    needs_review: int
    weak_topic: int
    due_for_review: int
