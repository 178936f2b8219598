import json
import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)

ANSWERS_KEY = "quizAnswers"

class AnswerStore:
    """
    Session-scoped hand-off of the answer set between the quiz step and the
    results step. Values are kept JSON-encoded, as a browser's local storage
    would keep them, and live only as long as this object.
    """

    def __init__(self):
        self._items: Dict[str, str] = {}

    def save(self, answers: Dict[str, str]) -> None:
        self._items[ANSWERS_KEY] = json.dumps(answers)
        logger.debug(f"Stored answers under '{ANSWERS_KEY}': {sorted(answers)}")

    def load(self) -> Optional[Dict[str, str]]:
        """
        Returns the stored answer set, or None if nothing usable is stored.
        """
        raw = self._items.get(ANSWERS_KEY)
        if raw is None:
            logger.debug(f"No answers stored under '{ANSWERS_KEY}'")
            return None
        try:
            answers = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Discarding unreadable stored answers: {e}")
            return None
        if not isinstance(answers, dict):
            logger.warning(f"Discarding stored answers of unexpected type {type(answers).__name__}")
            return None
        return answers

    def clear(self) -> None:
        self._items.pop(ANSWERS_KEY, None)
