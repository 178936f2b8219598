#!/usr/bin/env python3
"""Student Kickoff Wrap: take the semester quiz in the terminal and get your wrap."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from pydantic import ValidationError

from config.settings import get_settings
from services.wrap_engine.card import save_card
from services.wrap_engine.engine import WrapEngine
from services.wrap_engine.loader import ContentValidationError
from services.wrap_engine.models import (
    IncompleteAnswersError,
    InvalidSubmissionError,
    ResultPayload,
)
from services.wrap_engine.quiz_flow import QuizFlow
from services.wrap_engine.share import build_share_payload
from src.core.logging_config import setup_logging
from src.services.storage import AnswerStore

logger = logging.getLogger(__name__)

LANDING = """\
✨ Semester Kickoff Edition ✨

Your Student Kickoff Wrap 🎓
Get your personalized semester forecast! Find out your stress levels,
survival mode, and which CS course will humble you this term.

  📈 Stress Prediction - See what's coming
  ⚡ Your Role         - Find your archetype
  ✨ Fortune           - Get your prophecy

Takes less than 2 minutes.
"""


def parse_answer_args(pairs: List[str]) -> Dict[str, str]:
    """Turns ["vibe=survivor", ...] into an answer mapping."""
    answers: Dict[str, str] = {}
    for pair in pairs:
        question_id, sep, value = pair.partition("=")
        if not sep or not question_id.strip() or not value.strip():
            raise InvalidSubmissionError(f"Expected QUESTION=VALUE, got '{pair}'")
        answers[question_id.strip()] = value.strip()
    return answers


def format_results(payload: ResultPayload) -> str:
    return "\n".join([
        "Your Semester Kickoff Report 💻🔥",
        payload.badge,
        "",
        "STRESS PREDICTION",
        f"  {payload.stress_level}% chance",
        f"  {payload.stress_message}",
        "",
        "YOUR SEMESTER ROLE",
        f"  {payload.role}",
        "",
        "SEMESTER FORTUNE",
        f'  "{payload.fortune}"',
        "",
        "Generated by Student Kickoff Wrap ✨",
    ])


def run_quiz(flow: QuizFlow, input_fn: Callable[[str], str] = input) -> bool:
    """Asks the questions until the flow completes. Returns False if the user quits."""
    while not flow.is_complete:
        question = flow.current_question
        print(f"\nQuestion {flow.position + 1} of {flow.total}  ({flow.progress_percent}%)")
        print(question.question)
        for index, option in enumerate(question.options, start=1):
            marker = "*" if option.value == flow.selected_value else " "
            print(f" {marker}{index}. {option.emoji} {option.label}")

        choice = input_fn("Pick 1-4, [b]ack or [q]uit: ").strip().lower()
        if choice == "q":
            return False
        if choice == "b":
            flow.back()
            continue
        if choice.isdigit() and 1 <= int(choice) <= len(question.options):
            flow.select(question.options[int(choice) - 1].value)
        else:
            print("Please pick one of the listed options.")
    return True


DOWNLOAD_FAILED = "Failed to download. Try screenshot instead!"


def download_card(payload: ResultPayload, path: str, font_path: Optional[str]) -> Optional[Path]:
    """Writes the report card, or tells the user and returns None if it cannot be written."""
    try:
        return save_card(payload, path, font_path)
    except OSError as e:
        logger.error(f"Could not write report card to {path}: {e}")
        print(DOWNLOAD_FAILED, file=sys.stderr)
        return None


def results_step(engine: WrapEngine, store: AnswerStore, input_fn: Callable[[str], str] = input) -> str:
    """
    Shows the wrap for the stored answers and runs the action menu.
    Returns "home" when nothing is stored, otherwise "retry" or "quit".
    """
    settings = get_settings()
    answers = store.load()
    if answers is None:
        return "home"

    print("\n🔮 Calculating your semester forecast... Reading the vibes ✨\n")
    payload = engine.derive(answers)
    print(format_results(payload))

    while True:
        action = input_fn("\n[d]ownload, [s]hare, [r]etry or [q]uit: ").strip().lower()
        if action == "d":
            path = download_card(payload, settings.card_output_path, settings.card_font_path)
            if path is not None:
                print(f"Downloaded to {path}! Share it with your friends 🎉")
        elif action == "s":
            share = build_share_payload(payload, settings.share_url)
            print(f"{share.title}\n{share.text}\n{share.url}")
        elif action == "r":
            store.clear()
            return "retry"
        elif action == "q":
            return "quit"


def interactive(engine: WrapEngine, input_fn: Callable[[str], str] = input) -> int:
    store = AnswerStore()
    flow = QuizFlow(engine.content.questions)

    print(LANDING)
    if input_fn("Start your wrap? [Y/n]: ").strip().lower() == "n":
        return 0

    while True:
        if not run_quiz(flow, input_fn):
            print("See you next time 👋")
            return 0
        store.save(flow.answers())

        outcome = results_step(engine, store, input_fn)
        if outcome == "quit":
            return 0
        if outcome == "home":
            print(LANDING)
        flow.reset()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Student Kickoff Wrap: your semester forecast")
    parser.add_argument("--answer", "-a", action="append", default=[], metavar="QUESTION=VALUE",
                        help="Answer a question directly (repeatable); skips the interactive quiz")
    parser.add_argument("--content", help="Path to the wrap content YAML")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON (needs --answer)")
    parser.add_argument("--share", action="store_true", help="Print the share message (needs --answer)")
    parser.add_argument("--download", nargs="?", const="", default=None, metavar="PATH",
                        help="Write the report card PNG (needs --answer; default: configured output path)")
    return parser


def main(argv: Optional[List[str]] = None, input_fn: Callable[[str], str] = input) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.answer and (args.json or args.share or args.download is not None):
        parser.error("--json, --share and --download need --answer; the interactive quiz has its own menu")

    settings = get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json)

    try:
        engine = WrapEngine(content_path=args.content or settings.content_path)
    except (ContentValidationError, ValidationError) as e:
        logger.error(f"Could not load wrap content: {e}")
        print(f"Error: could not load wrap content: {e}", file=sys.stderr)
        return 1

    if not args.answer:
        return interactive(engine, input_fn)

    try:
        payload = engine.derive(parse_answer_args(args.answer))
    except (IncompleteAnswersError, InvalidSubmissionError) as e:
        logger.error(f"Rejected answers: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(payload.model_dump_json(by_alias=True))
    else:
        print(format_results(payload))

    if args.share:
        share = build_share_payload(payload, settings.share_url)
        print(f"\n{share.title}\n{share.text}\n{share.url}")

    if args.download is not None:
        path = download_card(payload, args.download or settings.card_output_path, settings.card_font_path)
        if path is None:
            return 1
        print(f"\nReport card saved to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
