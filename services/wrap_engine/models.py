from pydantic import BaseModel, ConfigDict, Field
from typing import List, Dict

# Fixed question order. Seeds are built by walking answers in this order,
# never in mapping insertion order.
QUESTION_ORDER = ("vibe", "course", "allnighters", "study", "goal")
STRESS_QUESTIONS = ("vibe", "course", "allnighters", "study")

class QuestionOption(BaseModel):
    label: str
    value: str
    emoji: str

class Question(BaseModel):
    id: str
    question: str
    options: List[QuestionOption]

    def option_values(self) -> List[str]:
        return [option.value for option in self.options]

class WrapContent(BaseModel):
    version: str
    released_at: str # Could be date, but string is safer for parsing
    questions: List[Question]
    stress_weights: Dict[str, Dict[str, int]] # {question_id: {option_value: weight}}
    default_stress_weight: int = 50
    stress_messages: Dict[str, str] # {course option value: message}
    default_stress_message: str
    roles: List[str]
    fortunes: List[str]
    badges: List[str]

class ResultPayload(BaseModel):
    """
    The derived semester wrap. Serialized with camelCase keys so a stored or
    shared payload reads the same as the one the web shell produced.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    stress_level: int = Field(..., ge=0, le=100, alias="stressLevel")
    stress_message: str = Field(..., alias="stressMessage")
    role: str
    fortune: str
    badge: str

class SharePayload(BaseModel):
    title: str
    text: str
    url: str

# Custom Error Classes
class IncompleteAnswersError(ValueError):
    """Raised when a stress-relevant question has no answer."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required answers: {', '.join(self.missing)}")

class InvalidSubmissionError(ValueError):
    """Custom exception for invalid submission data (e.g., unknown question ids)."""
    pass
