"""
Quiz submission scoring. Answers are matched to questions by position:
answers[i] is the option index chosen for the i-th question (sort_order).
"""
from dataclasses import dataclass
from typing import Any, Sequence


class EmptyQuizError(ValueError):
    """Raised when a quiz has no questions; a score would be a division by zero."""


@dataclass(frozen=True)
class ScoreResult:
    correct: int
    total: int
    score: float  # percentage, 0-100


def _is_match(answer: Any, correct_index: int) -> bool:
    """Exact match on an integer option index. Booleans, strings and None never match."""
    if isinstance(answer, bool):
        return False
    if isinstance(answer, int):
        return answer == correct_index
    if isinstance(answer, float):
        return answer.is_integer() and int(answer) == correct_index
    return False


def score_answers(correct_indices: Sequence[int], answers: Sequence[Any]) -> ScoreResult:
    """
    Count exact matches between answers and correct indices, position by position.
    Missing trailing answers and extra answers are ignored. Raises EmptyQuizError when there are no questions.
    """
    total = len(correct_indices)
    if total == 0:
        raise EmptyQuizError("Quiz has no questions")
    correct = 0
    for i, correct_index in enumerate(correct_indices):
        if i < len(answers) and _is_match(answers[i], correct_index):
            correct += 1
    return ScoreResult(correct=correct, total=total, score=correct / total * 100)


def is_passing(score: float, passing_score: float) -> bool:
    return score >= passing_score
