import yaml
from pydantic import ValidationError
from typing import Dict, Any

from services.wrap_engine.models import QUESTION_ORDER, STRESS_QUESTIONS, WrapContent

ROLE_COUNT = 15
FORTUNE_COUNT = 15
BADGE_COUNT = 10

class ContentValidationError(ValueError):
    """Custom exception for content table errors not covered by Pydantic."""
    pass

def load_wrap_content_data(data: Dict[str, Any]) -> WrapContent:
    """
    Validates the raw dictionary data against the WrapContent model
    and performs the cross-table checks the schema cannot express.
    """
    try:
        content = WrapContent.model_validate(data)
    except ValidationError as e:
        # Re-raise Pydantic's validation error for schema issues
        raise e

    question_options: Dict[str, set] = {}
    for question in content.questions:
        if question.id in question_options:
            raise ContentValidationError(f"Duplicate question ID found: {question.id}")

        seen_values = set()
        for option in question.options:
            if option.value in seen_values:
                raise ContentValidationError(f"Duplicate option value '{option.value}' in question '{question.id}'")
            seen_values.add(option.value)
        question_options[question.id] = seen_values

    question_ids = [q.id for q in content.questions]
    if question_ids != list(QUESTION_ORDER):
        raise ContentValidationError(f"Questions must be {list(QUESTION_ORDER)} in that order, found {question_ids}")

    for question_id, weights in content.stress_weights.items():
        if question_id not in question_options:
            raise ContentValidationError(f"Stress weights reference unknown question '{question_id}'")
        if question_id == "goal":
            raise ContentValidationError("The 'goal' question must not carry stress weights")
        if set(weights) != question_options[question_id]:
            raise ContentValidationError(f"Stress weights for '{question_id}' must cover exactly its options {sorted(question_options[question_id])}, found {sorted(weights)}")
        for value, weight in weights.items():
            if not 0 <= weight <= 100:
                raise ContentValidationError(f"Stress weight {weight} for '{question_id}/{value}' is outside 0..100")

    missing_tables = [qid for qid in STRESS_QUESTIONS if qid not in content.stress_weights]
    if missing_tables:
        raise ContentValidationError(f"Missing stress weights for question(s): {', '.join(missing_tables)}")

    if not 0 <= content.default_stress_weight <= 100:
        raise ContentValidationError(f"Default stress weight {content.default_stress_weight} is outside 0..100")

    course_values = question_options.get("course", set())
    for value in content.stress_messages:
        if value not in course_values:
            raise ContentValidationError(f"Stress message keyed by '{value}', which is not a course option")

    for name, table, expected in (
        ("roles", content.roles, ROLE_COUNT),
        ("fortunes", content.fortunes, FORTUNE_COUNT),
        ("badges", content.badges, BADGE_COUNT),
    ):
        if len(table) != expected:
            raise ContentValidationError(f"Expected {expected} {name}, found {len(table)}")

    return content

def load_wrap_content_from_file(file_path: str) -> WrapContent:
    """
    Loads the wrap content tables from a YAML file, validates them,
    and returns a WrapContent object.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ContentValidationError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise ContentValidationError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise ContentValidationError(f"YAML file is empty or invalid: {file_path}")

    return load_wrap_content_data(data)
