"""Commitment scoring for the goal stress test."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

_EXPECTED_INDICES = list(range(6))

PAIN_WEIGHT = 0.4
DRIVE_WEIGHT = 0.6
DEFAULT_THRESHOLD = 60.0


@dataclass(frozen=True)
class StressTestAnswer:
    question_index: int
    selected_score: int


@dataclass(frozen=True)
class CommitmentScore:
    score: float
    pain_score: float
    drive_score: float
    decision: str


def _validate(answers: Sequence[StressTestAnswer]) -> None:
    if len(answers) != 6:
        raise ValueError("Must provide exactly 6 answers")
    for answer in answers:
        if not 1 <= answer.selected_score <= 5:
            raise ValueError(f"Question {answer.question_index}: selected score must be between 1 and 5")
    if sorted(answer.question_index for answer in answers) != _EXPECTED_INDICES:
        raise ValueError("Answers must cover all question indices from 0 to 5")


def calculate_commitment_score(
    answers: Sequence[StressTestAnswer], threshold: float = DEFAULT_THRESHOLD
) -> CommitmentScore:
    """Score six stress-test answers on a 20-100 scale.

    Questions 0-2 measure pain, 3-5 measure drive. The weighted mean of the two
    groups decides whether the goal proceeds.
    """

    _validate(answers)
    ordered = sorted(answers, key=lambda answer: answer.question_index)
    pain = sum(answer.selected_score for answer in ordered[:3]) / 3
    drive = sum(answer.selected_score for answer in ordered[3:]) / 3
    score = (pain * PAIN_WEIGHT + drive * DRIVE_WEIGHT) * 20

    return CommitmentScore(
        score=round(score, 2),
        pain_score=round(pain, 2),
        drive_score=round(drive, 2),
        decision="REJECT" if score < threshold else "PROCEED",
    )
