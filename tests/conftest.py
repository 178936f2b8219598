import copy

import pytest
import yaml

from config.settings import DEFAULT_CONTENT_PATH
from services.wrap_engine.engine import WrapEngine

CONTENT_PATH = DEFAULT_CONTENT_PATH

# The worked example: weights 75, 80, 85, 80
SURVIVOR_ANSWERS = {
    "vibe": "survivor",
    "course": "os",
    "allnighters": "many",
    "study": "cram",
    "goal": "survive",
}


@pytest.fixture(scope="session")
def raw_content():
    """The content YAML as a plain dict, loaded once."""
    with open(CONTENT_PATH, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def content_data(raw_content):
    """A private copy of the content dict that a test may mutate."""
    return copy.deepcopy(raw_content)


@pytest.fixture(scope="session")
def engine():
    """Provides a WrapEngine loaded with the bundled content."""
    try:
        return WrapEngine(content_path=CONTENT_PATH)
    except Exception as e:
        pytest.fail(f"Failed to initialize WrapEngine: {e}")


@pytest.fixture
def survivor_answers():
    return dict(SURVIVOR_ANSWERS)
