import json
import logging

import pytest

import main
from services.wrap_engine.models import InvalidSubmissionError
from src.services.storage import AnswerStore

SURVIVOR_ARGS = [
    "--answer", "vibe=survivor",
    "--answer", "course=os",
    "--answer", "allnighters=many",
    "--answer", "study=cram",
    "--answer", "goal=survive",
]


@pytest.fixture(autouse=True)
def _drop_log_handlers():
    """main() installs a stderr handler; remove it so later tests don't write to a closed capture."""
    yield
    root = logging.getLogger()
    for handler in [h for h in root.handlers if getattr(h, "_wrap_handler", False)]:
        root.removeHandler(handler)


def _scripted(*replies):
    it = iter(replies)
    return lambda prompt="": next(it)

# --- parse_answer_args ---

def test_parse_answer_args():
    assert main.parse_answer_args(["vibe=survivor", " course = os "]) == {"vibe": "survivor", "course": "os"}

@pytest.mark.parametrize("pair", ["vibe", "=os", "vibe="])
def test_parse_answer_args_rejects_malformed(pair):
    with pytest.raises(InvalidSubmissionError, match="Expected QUESTION=VALUE"):
        main.parse_answer_args([pair])

# --- Non-interactive mode ---

def test_json_output(capsys):
    assert main.main(SURVIVOR_ARGS + ["--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data == {
        "stressLevel": 80,
        "stressMessage": "Operating Systems gonna test your patience",
        "role": "Hello World Hero 🌍",
        "fortune": "Coffee consumption will reach unprecedented levels",
        "badge": "🧃🍜💡",
    }

def test_text_output(capsys):
    assert main.main(SURVIVOR_ARGS) == 0
    out = capsys.readouterr().out
    assert "80% chance" in out
    assert "Hello World Hero 🌍" in out
    assert '"Coffee consumption will reach unprecedented levels"' in out

def test_missing_answer_exits_with_2(capsys):
    assert main.main(SURVIVOR_ARGS[:6]) == 2
    assert "Missing required answers: study" in capsys.readouterr().err

def test_unknown_question_exits_with_2(capsys):
    assert main.main(SURVIVOR_ARGS + ["--answer", "mood=sunny"]) == 2
    assert "Unknown question id(s): mood" in capsys.readouterr().err

def test_malformed_answer_exits_with_2(capsys):
    assert main.main(["--answer", "vibe"]) == 2
    assert "Expected QUESTION=VALUE" in capsys.readouterr().err

def test_share_flag(capsys, monkeypatch):
    monkeypatch.setenv("WRAP_SHARE_URL", "https://wrap.example")
    assert main.main(SURVIVOR_ARGS + ["--share"]) == 0
    out = capsys.readouterr().out
    assert "My Student Kickoff Wrap" in out
    assert "Just got my semester forecast! 80% stress incoming 😅" in out
    assert "https://wrap.example" in out

def test_download_flag_with_path(tmp_path, capsys):
    target = tmp_path / "wrap.png"
    assert main.main(SURVIVOR_ARGS + ["--download", str(target)]) == 0
    assert target.exists()
    assert str(target) in capsys.readouterr().out

def test_download_flag_uses_configured_path(tmp_path, monkeypatch):
    target = tmp_path / "configured.png"
    monkeypatch.setenv("WRAP_CARD_OUTPUT_PATH", str(target))
    assert main.main(SURVIVOR_ARGS + ["--download"]) == 0
    assert target.exists()

def test_bad_content_path_exits_with_1(tmp_path, capsys):
    assert main.main(SURVIVOR_ARGS + ["--content", str(tmp_path / "missing.yml")]) == 1
    assert "could not load wrap content" in capsys.readouterr().err

# --- Interactive mode ---

def test_interactive_decline_at_landing(capsys):
    assert main.main([], input_fn=_scripted("n")) == 0
    out = capsys.readouterr().out
    assert "Your Student Kickoff Wrap" in out
    assert "Question 1 of 5" not in out

def test_interactive_full_run_with_share(capsys):
    replies = _scripted("", "2", "2", "3", "2", "1", "s", "q")
    assert main.main([], input_fn=replies) == 0
    out = capsys.readouterr().out
    assert "Question 5 of 5  (100%)" in out
    assert "80% chance" in out
    assert "Just got my semester forecast! 80% stress incoming 😅" in out

def test_interactive_back_invalid_and_retry(capsys):
    replies = _scripted("y", "1", "b", "2", "x", "2", "3", "2", "1", "r", "q")
    assert main.main([], input_fn=replies) == 0
    out = capsys.readouterr().out
    assert "Please pick one of the listed options." in out
    assert " *1. 📚 I'll attend all classes" in out  # previous choice marked after going back
    assert "80% chance" in out
    assert "See you next time" in out

def test_interactive_download(tmp_path, monkeypatch, capsys):
    target = tmp_path / "my-semester-wrap.png"
    monkeypatch.setenv("WRAP_CARD_OUTPUT_PATH", str(target))
    replies = _scripted("", "1", "1", "1", "1", "1", "d", "q")
    assert main.main([], input_fn=replies) == 0
    assert target.exists()
    assert "Share it with your friends" in capsys.readouterr().out

# --- Card download failures ---

@pytest.fixture
def unwritable_card_path(tmp_path):
    """A card path whose parent is a regular file, so the PNG cannot be written."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    return blocker / "card.png"

def test_download_flag_failure_exits_with_1(unwritable_card_path, capsys):
    assert main.main(SURVIVOR_ARGS + ["--download", str(unwritable_card_path)]) == 1
    captured = capsys.readouterr()
    assert main.DOWNLOAD_FAILED in captured.err
    assert "80% chance" in captured.out
    assert "Report card saved" not in captured.out

def test_interactive_download_failure_keeps_menu(unwritable_card_path, monkeypatch, capsys):
    monkeypatch.setenv("WRAP_CARD_OUTPUT_PATH", str(unwritable_card_path))
    replies = _scripted("", "1", "1", "1", "1", "1", "d", "s", "q")
    assert main.main([], input_fn=replies) == 0
    captured = capsys.readouterr()
    assert main.DOWNLOAD_FAILED in captured.err
    assert "Share it with your friends" not in captured.out
    assert "Just got my semester forecast!" in captured.out

# --- Results step ---

def test_results_step_without_answers_goes_home(engine, capsys):
    assert main.results_step(engine, AnswerStore(), _scripted()) == "home"
    assert "% chance" not in capsys.readouterr().out

def test_results_step_quit_keeps_answers(engine, survivor_answers):
    store = AnswerStore()
    store.save(survivor_answers)
    assert main.results_step(engine, store, _scripted("q")) == "quit"
    assert store.load() == survivor_answers

def test_results_step_retry_clears_answers(engine, survivor_answers, capsys):
    store = AnswerStore()
    store.save(survivor_answers)
    assert main.results_step(engine, store, _scripted("x", "r")) == "retry"
    assert store.load() is None
    assert "80% chance" in capsys.readouterr().out

# --- Output flags need --answer ---

@pytest.mark.parametrize("flags", [["--json"], ["--share"], ["--download"], ["--download", "card.png"]])
def test_output_flags_without_answers_rejected(flags, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main.main(flags, input_fn=_scripted())
    assert excinfo.value.code == 2
    assert "need --answer" in capsys.readouterr().err
