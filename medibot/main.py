"""CLI entry point for the MediBot assistant.

Usage:
    python -m medibot.main            # normal mode (quiet)
    python -m medibot.main --debug    # debug mode (shows API calls)
"""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

from medibot import prompts

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"


def _configure_logging(debug: bool = False) -> None:
    """Set up logging: WARNING by default, DEBUG when --debug is passed."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    )

    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.getLogger("medibot").setLevel(logging.DEBUG if debug else logging.INFO)


def run_chat_loop(bot) -> None:
    """Read lines from stdin until ``exit`` or EOF, printing each reply."""
    while True:
        try:
            user_input = input("Siz: ").strip()
        except (KeyboardInterrupt, EOFError):
            print(f"\nBot: {prompts.GOODBYE_REPLY}")
            break

        if not user_input:
            continue

        if user_input.lower() == EXIT_COMMAND:
            print(f"Bot: {prompts.GOODBYE_REPLY}")
            break

        try:
            reply = bot.respond(user_input)
        except Exception:
            logger.exception("Error processing message")
            reply = prompts.GENERIC_FAILURE_REPLY
        print(f"Bot: {reply}")


def main() -> None:
    """Run the interactive CLI chat loop."""
    parser = argparse.ArgumentParser(description="MediBot appointment assistant CLI")
    parser.add_argument(
        "--debug", action="store_true",
        help="Show all log messages including HTTP requests",
    )
    args = parser.parse_args()

    load_dotenv()
    _configure_logging(debug=args.debug)

    try:
        from medibot.bot import create_chatbot  # noqa: PLC0415 — config is validated on import
    except OSError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        sys.exit(1)

    bot = create_chatbot()
    print(f"🤖 Medikal Asistan başladı. Çıkmak için '{EXIT_COMMAND}' yazın.")
    try:
        run_chat_loop(bot)
    finally:
        bot.close()


if __name__ == "__main__":
    main()
