import logging
import math
from typing import Dict, List, Any, Optional

from config.settings import get_settings
from .loader import load_wrap_content_from_file
from .models import (
    QUESTION_ORDER,
    STRESS_QUESTIONS,
    IncompleteAnswersError,
    InvalidSubmissionError,
    ResultPayload,
    WrapContent,
)

logger = logging.getLogger(__name__)

class WrapEngine:
    """
    Derives the semester wrap (stress level, role, fortune, badge) from a
    completed answer set using the static content tables.
    """
    def __init__(self, content_path: Optional[str] = None, content: Optional[WrapContent] = None):
        """
        Initializes the engine from an already validated WrapContent or by
        loading the YAML content file.

        Args:
            content_path: Path to the content YAML. Defaults to the configured path.
            content: Pre-loaded content; takes precedence over content_path.
        """
        if content is None:
            content_path = content_path or get_settings().content_path
            content = load_wrap_content_from_file(content_path)
            logger.info(f"Loaded wrap content v{content.version} from {content_path}")
        self.content = content
        self.questions = {q.id: q for q in content.questions}

    def get_questions(self) -> List[Dict[str, Any]]:
        """Returns the questions in presentation order."""
        return [q.model_dump() for q in self.content.questions]

    def derive(self, answers: Dict[str, str]) -> ResultPayload:
        """
        Derives the result payload for a completed answer set.

        Args:
            answers: Question id -> selected option value. All four
                     stress-relevant questions are required; 'goal' is optional.

        Returns:
            A fresh, immutable ResultPayload.

        Raises:
            InvalidSubmissionError: If a key is not one of the fixed question ids
                                    or a value is not a string.
            IncompleteAnswersError: If a stress-relevant question is unanswered.
        """
        self._validate(answers)

        # Walk the fixed order so identical answer sets give identical seeds
        ordered_values = [answers[qid] for qid in QUESTION_ORDER if qid in answers]
        joined = "".join(ordered_values)

        return ResultPayload(
            stress_level=self._compute_stress_level(answers),
            stress_message=self._select_stress_message(answers.get("course")),
            role=self._pick(self.content.roles, len(joined)),
            fortune=self._pick(self.content.fortunes, ord(joined[0]) if joined else 0),
            badge=self._pick(self.content.badges, len(ordered_values) * len(joined)),
        )

    def _validate(self, answers: Dict[str, str]) -> None:
        unknown = [key for key in answers if key not in QUESTION_ORDER]
        if unknown:
            raise InvalidSubmissionError(f"Unknown question id(s): {', '.join(sorted(unknown))}")

        for question_id, value in answers.items():
            if not isinstance(value, str):
                raise InvalidSubmissionError(f"Answer for '{question_id}' must be a string, got {type(value).__name__}")

        missing = [qid for qid in STRESS_QUESTIONS if qid not in answers]
        if missing:
            raise IncompleteAnswersError(missing)

    def _compute_stress_level(self, answers: Dict[str, str]) -> int:
        """Averages the weights of the stress-relevant answers, rounding half up."""
        total = 0
        count = 0
        for question_id in STRESS_QUESTIONS:
            value = answers[question_id]
            weights = self.content.stress_weights.get(question_id, {})
            if value not in weights:
                logger.warning(f"Unrecognized answer '{value}' for '{question_id}', using default weight {self.content.default_stress_weight}")
            total += weights.get(value, self.content.default_stress_weight)
            count += 1
        return int(math.floor(total / count + 0.5))

    def _select_stress_message(self, course: Optional[str]) -> str:
        if course is None:
            return self.content.default_stress_message
        return self.content.stress_messages.get(course, self.content.default_stress_message)

    @staticmethod
    def _pick(table: List[str], seed: int) -> str:
        return table[seed % len(table)]


_default_engine: Optional[WrapEngine] = None

def get_default_engine() -> WrapEngine:
    """Returns the engine bound to the configured content file, loading it once."""
    global _default_engine
    if _default_engine is None:
        _default_engine = WrapEngine()
    return _default_engine

def derive(answers: Dict[str, str]) -> ResultPayload:
    """Derives the wrap with the default engine. See WrapEngine.derive."""
    return get_default_engine().derive(answers)
