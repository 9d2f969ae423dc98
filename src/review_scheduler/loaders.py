# ABOUTME: Converts tabular attempt data into question performance records.
# ABOUTME: Reads parquet/csv/json tables and exports the review queue as a DataFrame.

from __future__ import annotations

import numbers
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import List, Sequence, Union

import numpy as np
import pandas as pd

from .schemas import QuestionPerformance, SpacedReviewItem

PERFORMANCE_COLUMNS = ["question_id", "is_correct", "last_answered_at", "times_answered", "times_correct"]
ATTEMPT_COLUMNS = ["question_id", "is_correct", "answered_at"]
ID_DTYPES = {"question_id": str, "quiz_id": str}
QUEUE_COLUMNS = [
    "question_id",
    "quiz_id",
    "quiz_title",
    "question_text",
    "topic",
    "difficulty",
    "priority_score",
    "label",
    "last_answered_at",
    "accuracy",
    "times_answered",
    "tags",
]


def to_epoch_ms(value: Union[int, float, str, datetime, pd.Timestamp]) -> int:
    """
    Normalize an instant to milliseconds since epoch.

    Numbers are taken to already be milliseconds. Naive datetimes are UTC.
    """

    if isinstance(value, numbers.Real):
        return int(value)
    ts = pd.Timestamp(value)
    if pd.isna(ts):
        raise ValueError(f"Cannot interpret {value!r} as a timestamp.")
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return int(ts.value // 1_000_000)


def read_table(path: Union[str, Path]) -> pd.DataFrame:
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".parquet":
        return pd.read_parquet(path)
    if suffix == ".csv":
        return pd.read_csv(path, dtype=ID_DTYPES)
    if suffix == ".json":
        return pd.read_json(path, orient="records", dtype=ID_DTYPES)
    raise ValueError(f"Unsupported file type '{suffix}'. Expected .parquet, .csv, or .json.")


def write_table(df: pd.DataFrame, path: Union[str, Path]) -> None:
    path = Path(path)
    suffix = path.suffix.lower()
    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".parquet":
        df.to_parquet(path, index=False)
    elif suffix == ".csv":
        df.to_csv(path, index=False)
    elif suffix == ".json":
        df.to_json(path, orient="records", indent=2)
    else:
        raise ValueError(f"Unsupported file type '{suffix}'. Expected .parquet, .csv, or .json.")


def performances_from_frame(df: pd.DataFrame) -> List[QuestionPerformance]:
    """One QuestionPerformance per row of an already-aggregated stats table."""

    _require_columns(df, PERFORMANCE_COLUMNS)
    records = []
    for row in df.to_dict(orient="records"):
        records.append(
            QuestionPerformance(
                question_id=str(row["question_id"]),
                is_correct=_as_bool(row["is_correct"]),
                last_answered_at=to_epoch_ms(row["last_answered_at"]),
                times_answered=int(row["times_answered"]),
                times_correct=int(row["times_correct"]),
                response_time=_as_float(row.get("response_time")),
                **_display_fields(row),
            )
        )
    return records


def performances_from_attempts(attempts: pd.DataFrame) -> List[QuestionPerformance]:
    """
    Fold a raw attempt log into one record per question.

    Steps:
    - Order attempts by answered_at (stable, so same-instant rows keep log order).
    - Take outcome, timestamp, response time, and display fields from the last attempt.
    - Count attempts and correct attempts per question.
    """

    _require_columns(attempts, ATTEMPT_COLUMNS)
    if attempts.empty:
        return []

    log = attempts.copy()
    log["question_id"] = log["question_id"].astype(str)
    log["answered_at"] = [to_epoch_ms(v) for v in log["answered_at"]]
    log["is_correct"] = [_as_bool(v) for v in log["is_correct"]]
    log = log.sort_values("answered_at", kind="mergesort")

    grouped = log.groupby("question_id", sort=False)
    counts = grouped.agg(times_answered=("is_correct", "size"), times_correct=("is_correct", "sum"))
    latest = grouped.tail(1).set_index("question_id")

    records = []
    for question_id, row in latest.iterrows():
        payload = row.to_dict()
        records.append(
            QuestionPerformance(
                question_id=str(question_id),
                is_correct=bool(payload["is_correct"]),
                last_answered_at=int(payload["answered_at"]),
                times_answered=int(counts.loc[question_id, "times_answered"]),
                times_correct=int(counts.loc[question_id, "times_correct"]),
                response_time=_as_float(payload.get("response_time")),
                **_display_fields(payload),
            )
        )
    return records


def queue_to_frame(items: Sequence[SpacedReviewItem]) -> pd.DataFrame:
    if not items:
        return pd.DataFrame(columns=QUEUE_COLUMNS)
    return pd.DataFrame([asdict(item) for item in items], columns=QUEUE_COLUMNS)


def _require_columns(df: pd.DataFrame, required: Sequence[str]) -> None:
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(missing)}.")


def _display_fields(row) -> dict:
    return {
        "quiz_id": _as_str(row.get("quiz_id")),
        "quiz_title": _as_str(row.get("quiz_title")),
        "question_text": _as_str(row.get("question_text")),
        "topic": _as_str(row.get("topic")),
        "difficulty": _as_float(row.get("difficulty")),
        "tags": _normalize_tags(row.get("tags")),
    }


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, float) and np.isnan(value))


def _as_str(value) -> str:
    return "" if _is_missing(value) else str(value)


def _as_float(value) -> float:
    return 0.0 if _is_missing(value) else float(value)


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "t"}
    return False if _is_missing(value) else bool(value)


def _normalize_tags(value) -> List[str]:
    if _is_missing(value):
        return []
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    if isinstance(value, (list, tuple, np.ndarray)):
        return [str(tag) for tag in value if tag is not None and str(tag)]
    return []

