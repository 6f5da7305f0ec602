"""Command-line interface for Caia."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .agent import HELP_TEXT, CaiaSession, create_llm_client
from .config import Settings, settings as default_settings
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str, log_file: Optional[Path] = None):
    """Send log records to stderr and, optionally, to a file."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    # Clear existing handlers to avoid duplication in repeated runs
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, handlers=handlers)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Caia - chat with an LLM that can create and edit your files and spreadsheets"
    )
    parser.add_argument(
        "--workspace", "-w", type=Path, help="Workspace directory (default: current directory)"
    )
    parser.add_argument(
        "--provider", choices=["anthropic", "openrouter"], help="LLM provider to use"
    )
    parser.add_argument("--model", help="Model name for the selected provider")
    parser.add_argument("--log-level", help="Logging level (default: WARNING)")
    return parser


def settings_from_args(args: argparse.Namespace, base: Settings) -> Settings:
    """Apply command-line overrides on top of the loaded settings."""
    updates = {}
    if args.workspace is not None:
        updates["workspace_root"] = args.workspace
    if args.provider:
        updates["llm_provider"] = args.provider
    if args.model:
        provider = args.provider or base.llm_provider
        updates["openrouter_model" if provider == "openrouter" else "model_name"] = args.model
    if args.log_level:
        updates["log_level"] = args.log_level.upper()
    return base.model_copy(update=updates)


def handle_command(session: CaiaSession, command: str) -> bool:
    """Run a slash command; returns False when the session should end."""
    if command == "/exit":
        print("Goodbye!")
        return False
    if command == "/clear":
        session.reset_conversation()
        print("Conversation history cleared.")
    elif command == "/help":
        print(HELP_TEXT)
    elif command == "/index":
        try:
            session.reindex()
        except OSError as e:
            print(f"Error indexing workspace files: {e}")
        else:
            print("Workspace files indexed successfully.")
    else:
        print(f"Unknown command: {command}")
    return True


def run_interactive(session: CaiaSession) -> int:
    """Prompt loop; returns the process exit status."""
    try:
        session.reindex()
    except OSError as e:
        print(f"Warning: Error indexing workspace files: {e}")

    print(HELP_TEXT)

    try:
        while True:
            try:
                user_input = input("\n> ").strip()
            except EOFError:
                break
            except OSError as e:
                print(f"Error reading input: {e}")
                return 1

            if not user_input:
                continue

            if user_input.startswith("/"):
                if not handle_command(session, user_input):
                    break
                continue

            session.process_message(user_input)
    finally:
        session.close()

    return 0


def main(argv: Optional[list[str]] = None):
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args, default_settings)
    configure_logging(settings.log_level, settings.log_file)

    try:
        client = create_llm_client(settings)
    except ConfigurationError as e:
        print(e)
        sys.exit(1)

    session = CaiaSession(client, settings=settings)
    sys.exit(run_interactive(session))


if __name__ == "__main__":
    main()
