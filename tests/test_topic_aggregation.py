# ABOUTME: Tests per-topic accuracy aggregation over question performance history.
# ABOUTME: Ensures every record counts, blank topics fold into General, and rounding is half-up.

from src.review_scheduler.schemas import QuestionPerformance
from src.review_scheduler.topic_aggregation import (
    aggregate_by_topic,
    build_topic_accuracy_map,
    percentage,
)


def _perf(question_id: str, topic: str, answered: int, correct: int, ts: int = 0) -> QuestionPerformance:
    return QuestionPerformance(
        question_id=question_id,
        is_correct=True,
        last_answered_at=ts,
        times_answered=answered,
        times_correct=correct,
        topic=topic,
    )


def test_aggregate_by_topic_sums_all_records_including_duplicates():
    perfs = [
        _perf("q1", "algebra", 4, 3, ts=1),
        _perf("q1", "algebra", 2, 0, ts=2),
        _perf("q2", "geometry", 5, 5),
    ]

    by_topic = {ta.topic: ta for ta in aggregate_by_topic(perfs)}

    assert set(by_topic) == {"algebra", "geometry"}
    assert by_topic["algebra"].total == 6
    assert by_topic["algebra"].correct == 3
    assert by_topic["algebra"].accuracy == 50
    assert by_topic["geometry"].accuracy == 100


def test_blank_and_missing_topics_group_under_general():
    perfs = [_perf("q1", "", 2, 1), _perf("q2", "   ", 2, 2)]

    accuracy_map = build_topic_accuracy_map(perfs)

    assert accuracy_map == {"General": 75}


def test_zero_answers_gives_zero_accuracy():
    accuracy_map = build_topic_accuracy_map([_perf("q1", "history", 0, 0)])
    assert accuracy_map["history"] == 0


def test_empty_input_returns_empty_list():
    assert aggregate_by_topic([]) == []
    assert build_topic_accuracy_map([]) == {}


def test_percentage_rounds_half_up():
    assert percentage(1, 8) == 13  # 12.5
    assert percentage(5, 8) == 63  # 62.5
    assert percentage(2, 3) == 67
    assert percentage(1, 0) == 0
