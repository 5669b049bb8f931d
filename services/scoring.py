"""Feedback aggregation and plain-text report rendering."""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel

from interview_session import (
    NO_ANSWER_TEXT,
    RUBRIC_DIMENSIONS,
    RubricEval,
    Session,
    default_eval,
)

SEPARATOR = "-" * 25


class FeedbackRow(BaseModel):
    question: str
    answer: str
    eval: RubricEval


def feedback_rows(session: Session) -> List[FeedbackRow]:
    """One row per asked question, with defaults for anything not yet recorded."""

    return [
        FeedbackRow(
            question=record.text,
            answer=record.candidate_answer if record.candidate_answer is not None else NO_ANSWER_TEXT,
            eval=record.eval if record.eval is not None else default_eval(),
        )
        for record in session.questions_asked
    ]


def average(values: Sequence[Optional[float]]) -> str:
    """Mean to one decimal place; "0.0" when there is nothing to average."""

    if not values:
        return "0.0"
    total = sum(value or 0 for value in values)
    return f"{total / len(values):.1f}"


def aggregate(rows: Sequence[FeedbackRow]) -> Dict[str, str]:
    return {
        dimension: average([getattr(row.eval, dimension) for row in rows])
        for dimension in RUBRIC_DIMENSIONS
    }


def _row_block(index: int, row: FeedbackRow) -> str:
    lines = [
        f"Q{index}: {row.question}",
        f"Your Answer: {row.answer}",
        "",
    ]
    for dimension in RUBRIC_DIMENSIONS:
        lines.append(f"{dimension.capitalize()}: {getattr(row.eval, dimension)} / 5")
    lines.append(f"Notes: {row.eval.notes}")
    lines.append(SEPARATOR)
    return "\n".join(lines) + "\n\n"


def feedback_report(session: Session) -> str:
    """Render the interview summary shown to the candidate at the end."""

    rows = feedback_rows(session)
    averages = aggregate(rows)

    summary = f"INTERVIEW SUMMARY\n{SEPARATOR}\n\n"
    for index, row in enumerate(rows, start=1):
        summary += _row_block(index, row)

    summary += "FINAL AGGREGATE SCORE\n"
    for dimension in RUBRIC_DIMENSIONS:
        summary += f"{dimension.capitalize()}: {averages[dimension]}\n"
    return summary.strip()


__all__ = ["FeedbackRow", "aggregate", "average", "feedback_report", "feedback_rows"]
