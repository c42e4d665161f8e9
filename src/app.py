"""Application entry point for the nudge message selector."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Optional

from art import tprint
from rich.console import Console
from rich.table import Table

import settings
from adapters.attribute_evaluator import AttributeExpressionEvaluator
from adapters.json_feature import JsonMessagingFeature
from adapters.sqlite_metadata_store import SQLiteMetadataStore
from nudge.errors import ConfigError
from nudge.lifecycle import MessageLifecycle
from nudge.models import Message
from nudge.selector import MessageSelector

NAME = "NUDGE"
FONT = "tarty-1"

LOGGER = logging.getLogger(__name__)


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging(config: dict) -> None:
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/nudge.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        file_handler = RotatingFileHandler(
            path,
            maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
            backupCount=int(file_cfg.get("backup_count", 5)),
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _parse_attributes(pairs: List[str]) -> Dict[str, Any]:
    """Turn ``key=value`` pairs into evaluator attributes."""

    attributes: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"Expected key=value, got {pair!r}")
        lowered = value.strip().lower()
        if lowered in {"true", "false"}:
            attributes[key.strip()] = lowered == "true"
        else:
            attributes[key.strip()] = value.strip()
    return attributes


def _render_catalog(console: Console, messages: List[Message]) -> None:
    if not messages:
        console.print("No messages available.")
        return

    table = Table(title="Message catalog")
    table.add_column("id")
    table.add_column("priority", justify="right")
    table.add_column("action")
    table.add_column("displays", justify="right")
    table.add_column("triggers")
    for message in messages:
        table.add_row(
            message.id,
            str(message.style.priority),
            message.action,
            f"{message.metadata.display_count}/{message.data.max_display_count}",
            ", ".join(message.triggers) or "-",
        )
    console.print(table)


def _find_message(selector: MessageSelector, message_id: str) -> Optional[Message]:
    for message in selector.get_messages():
        if message.id == message_id:
            return message
    return None


def _run(args: argparse.Namespace, console: Console) -> int:
    config = settings.load_settings(args.config)
    _configure_logging(config.logging)

    store = SQLiteMetadataStore(config.db_path)
    store.init_db()
    feature = JsonMessagingFeature(config.config_path, exposures=store)
    selector = MessageSelector(
        metadata_store=store,
        evaluator=AttributeExpressionEvaluator(),
        feature=feature,
    )

    if args.command == "catalog":
        _print_banner()
        _render_catalog(console, selector.get_messages())
        return 0

    if args.command == "next":
        evaluator = AttributeExpressionEvaluator(_parse_attributes(args.attr))
        message = selector.get_next_message(selector.get_messages(), evaluator)
        if message is None:
            console.print("No message")
            return 0
        console.print(f"{message.id} -> {message.action}")
        if message.data.title:
            console.print(message.data.title)
        return 0

    if args.command == "exposures":
        for experiment_id, recorded_at in store.list_exposures():
            console.print(f"{recorded_at.isoformat()} {experiment_id or '-'}")
        return 0

    message = _find_message(selector, args.message_id)
    if message is None:
        console.print(f"Message {args.message_id} is not in the current catalog")
        return 1

    lifecycle = MessageLifecycle(selector)
    if args.command == "displayed":
        entry = lifecycle.on_displayed(message)
    elif args.command == "pressed":
        entry = lifecycle.on_pressed(message)
    else:
        entry = lifecycle.on_dismissed(message)
    console.print(
        f"{entry.id}: displays={entry.display_count} "
        f"pressed={entry.pressed} dismissed={entry.dismissed}"
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nudge")
    parser.add_argument("--config", help="Path to config.json (defaults to NUDGE_CONFIG)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("catalog", help="Show the ordered candidate messages")
    next_parser = subparsers.add_parser("next", help="Select the next message to show")
    next_parser.add_argument(
        "--attr",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Attribute available to trigger expressions (repeatable)",
    )
    for command, help_text in (
        ("displayed", "Record that a message was shown"),
        ("pressed", "Record that a message was pressed"),
        ("dismissed", "Record that a message was dismissed"),
    ):
        command_parser = subparsers.add_parser(command, help=help_text)
        command_parser.add_argument("message_id")
    subparsers.add_parser("exposures", help="List recorded experiment exposures")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console()
    try:
        return _run(args, console)
    except (ConfigError, argparse.ArgumentTypeError) as exc:
        console.print(f"Error: {exc}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
