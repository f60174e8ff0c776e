"""
Familiada CLI - Command-line interface for the engine.

Usage:
    familiada play [--data FILE] [--random | --sequential] [--seed N]
    familiada questions [--data FILE]
    familiada serve [--host HOST] [--port PORT]
"""

import argparse
import asyncio
import sys

from .config import (
    FAMILIADA_DATA_PATH,
    FAMILIADA_HOST,
    FAMILIADA_PORT,
    configure_logging,
    random_override,
)
from .errors import ConfigurationError

PLAY_HELP = """Keys: q/w select blue/red, e deselect, x error, 1-9 reveal,
p next round, z undo, s score overlay, r listen (typed), h help, quit.
Type "a <text>" to submit a guess."""


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Familiada - game show host engine",
        prog="familiada",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from env)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Run a game in the terminal")
    play_parser.add_argument("--data", default=FAMILIADA_DATA_PATH, help="Question dataset JSON")
    order = play_parser.add_mutually_exclusive_group()
    order.add_argument("--random", dest="randomize", action="store_true", default=None,
                       help="Shuffle questions")
    order.add_argument("--sequential", dest="randomize", action="store_false",
                       help="Keep dataset order")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    play_parser.add_argument("--mute", action="store_true", help="No terminal bell")

    # Questions command
    questions_parser = subparsers.add_parser("questions", help="List the dataset")
    questions_parser.add_argument("--data", default=FAMILIADA_DATA_PATH, help="Question dataset JSON")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the host HTTP API")
    serve_parser.add_argument("--host", default=FAMILIADA_HOST)
    serve_parser.add_argument("--port", type=int, default=FAMILIADA_PORT)

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.command == "play":
            cmd_play(args)
        elif args.command == "questions":
            cmd_questions(args)
        elif args.command == "serve":
            cmd_serve(args)
        else:
            parser.print_help()
            sys.exit(1)
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_questions(args):
    """Print every question with its answers in board order."""
    from .dataset import load_dataset

    dataset = load_dataset(args.data)
    for index, (text, answers) in enumerate(dataset.questions.items(), start=1):
        print(f"{index}. {text}")
        ranked = sorted((a for a in answers if a is not None), key=lambda a: a.lp)
        for answer in ranked:
            print(f"   {answer.lp}. {answer.ans} ({answer.points})")
        print()


def cmd_play(args):
    """Interactive game with the text board."""
    from .dataset import load_dataset
    from .presentation import BellAudio, ScriptedRecognizer, SilentAudio
    from .session import build_session

    dataset = load_dataset(args.data)
    randomize = args.randomize if args.randomize is not None else random_override()
    recognizer = ScriptedRecognizer()
    session = build_session(
        dataset,
        randomize=randomize,
        seed=args.seed,
        audio=SilentAudio() if args.mute else BellAudio(),
        recognizer=recognizer,
    )
    controller = session.controller

    print(PLAY_HELP)
    print()
    print(session.board.render())

    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not line:
            continue
        if line in {"quit", "exit"}:
            break
        if line == "h":
            print(PLAY_HELP)
            continue

        if line.startswith("a "):
            result = controller.answer(line[2:])
        elif line.lower() == "r" and not controller.score_overlay_visible:
            # Typed stand-in for the microphone
            heard = input("heard> ").strip()
            recognizer.feed(heard or None)
            result = asyncio.run(controller.handle_key("r"))
        else:
            result = asyncio.run(controller.handle_key(line[0]))

        if not result.success:
            print(f"! {result.error}")
        for change in result.changes:
            print(f"- {change}")
        print()
        print(session.board.render())


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("familiada.api.app:create_app", factory=True, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
