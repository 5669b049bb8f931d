"""Terminal front end for practising an interview against the backend."""
from __future__ import annotations

import argparse
import sys
from typing import Callable, List, Optional, TextIO

from config.settings import settings
from interview_client.api import BackendClient
from interview_client.app import InterviewApp, Message

END_COMMAND = "/end"
LABELS = {"interviewer": "Interviewer", "candidate": "You", "system": "System"}


def render(message: Message) -> str:
    return f"{LABELS[message.role]}: {message.text}"


class TranscriptPrinter:  # Prints only messages not yet shown
    def __init__(self, out: TextIO) -> None:
        self._out = out
        self._shown = 0

    def flush(self, messages: List[Message]) -> None:
        for message in messages[self._shown:]:
            print(render(message), file=self._out)
        self._shown = len(messages)


def run(app: InterviewApp, args: argparse.Namespace, read: Callable[[str], str], out: TextIO) -> int:
    printer = TranscriptPrinter(out)
    if not app.start_session(role=args.role, level=args.level, persona=args.persona):
        printer.flush(app.messages)
        print("Could not start a session.", file=out)
        return 1
    printer.flush(app.messages)

    while app.status == "in-progress":
        try:
            line = read("> ")
        except EOFError:
            line = END_COMMAND
        if line.strip() == END_COMMAND:
            break
        app.handle_candidate_answer(line)
        printer.flush(app.messages)

    app.end_and_get_feedback()
    printer.flush(app.messages)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Practise a mock interview in the terminal")
    parser.add_argument("--role", default=settings.DEFAULT_ROLE)
    parser.add_argument("--level", default=settings.DEFAULT_LEVEL, choices=["junior", "mid", "senior"])
    parser.add_argument("--persona", default=settings.DEFAULT_PERSONA, choices=["efficient", "confused", "chatty"])
    parser.add_argument("--api-base", default=settings.API_BASE)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    with BackendClient(args.api_base) as api:
        return run(InterviewApp(api), args, input, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())
