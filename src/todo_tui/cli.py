"""CLI entry point for the todo application.

This module handles command-line argument parsing, logging setup,
configuration and the main entry point.
"""

from __future__ import annotations

import argparse
import json
import logging
import logging.handlers
import sys
from datetime import UTC, datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .app import TodoApp
from .config import Config, load_config
from .exceptions import ConfigError

logger = logging.getLogger(__name__)


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log line
        """
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "event": record.getMessage(),
            "context": {
                "module": record.module,
                "function": record.funcName,
                "line": record.lineno,
            },
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra context from record if present
        if hasattr(record, "extra_context"):
            log_data["context"].update(record.extra_context)

        return json.dumps(log_data)


def _setup_logging(log_file: Path, debug: bool) -> None:
    """Setup logging to the console and a JSON log file.

    Args:
        log_file: Path to log file
        debug: Show debug messages on the console

    Raises:
        OSError: If the log file cannot be opened
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Open the file first so a failure leaves the root logger untouched
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(JSONFormatter())
    file_handler.setLevel(logging.DEBUG)

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        log_time_format="%Y-%m-%d %H:%M:%S",
    )
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logger.info(
        "Logging initialized",
        extra={"extra_context": {"log_file": str(log_file), "debug": debug}},
    )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="todo-tui",
        description="Terminal todo list",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a JSON config file (default: built-in settings)",
    )

    parser.add_argument(
        "--data",
        type=Path,
        default=None,
        help="CSV file holding the todos (default: ./data.csv)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Log file path (default: ./todos.log)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging on the console",
    )

    return parser.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> Config:
    """Load the config file if given and apply command-line overrides.

    Raises:
        ConfigError: If the config file is missing or invalid
    """
    config = load_config(args.config) if args.config else Config()
    return config.with_overrides(data_path=args.data, log_file=args.log_file)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the todo application.

    Returns:
        Exit code (0=success, 1=error, 130=SIGINT)
    """
    args = _parse_args(argv)
    console = Console()

    try:
        config = _resolve_config(args)
    except ConfigError as err:
        console.print(f"[red]Error loading config: {err}[/red]")
        return 1

    try:
        _setup_logging(config.log_file, args.debug)
    except OSError as err:
        console.print(f"[red]Error: cannot open log file {config.log_file}: {err}[/red]")
        return 1

    logger.info(
        "TUI starting",
        extra={
            "extra_context": {
                "data_path": str(config.data_path),
                "config_path": str(args.config) if args.config else None,
            }
        },
    )

    app = TodoApp(config, console=console)
    exit_code = app.run()

    logger.info(
        "TUI exited",
        extra={"extra_context": {"exit_code": exit_code}},
    )
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
