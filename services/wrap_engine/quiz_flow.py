"""Walks the fixed question sequence and collects one answer per question."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .models import InvalidSubmissionError, Question

logger = logging.getLogger(__name__)


class QuizFlow:
    """Single-choice quiz state: current position, stored answers, completion."""

    def __init__(self, questions: List[Question]) -> None:
        if not questions:
            raise ValueError("A quiz needs at least one question.")
        self._questions = list(questions)
        self._answers: Dict[str, str] = {}
        self._position = 0
        self._complete = False

    @property
    def total(self) -> int:
        return len(self._questions)

    @property
    def position(self) -> int:
        return self._position

    @property
    def current_question(self) -> Question:
        return self._questions[self._position]

    @property
    def progress_percent(self) -> int:
        return round((self._position + 1) / self.total * 100)

    @property
    def selected_value(self) -> Optional[str]:
        return self._answers.get(self.current_question.id)

    @property
    def is_complete(self) -> bool:
        return self._complete

    def select(self, value: str) -> None:
        """Record the answer for the current question and advance."""
        question = self.current_question
        if value not in question.option_values():
            raise InvalidSubmissionError(f"'{value}' is not an option for question '{question.id}'")
        self._answers[question.id] = value
        logger.debug("Answered %s=%s", question.id, value)

        if self._position < self.total - 1:
            self._position += 1
        else:
            self._complete = True
            logger.info("Quiz complete with %d answers", len(self._answers))

    def back(self) -> None:
        """Return to the previous question, keeping the answers given so far."""
        if self._position > 0:
            self._position -= 1
            self._complete = False

    def answers(self) -> Dict[str, str]:
        """The collected answers, in question order."""
        return {q.id: self._answers[q.id] for q in self._questions if q.id in self._answers}

    def reset(self) -> None:
        self._answers.clear()
        self._position = 0
        self._complete = False
