"""Flat-file persistence for todo items.

Items are stored as a headerless CSV file with one single-field record per
line. The whole file is rewritten on every save. Reading skips malformed
records instead of failing the whole load.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from .exceptions import StorageError

logger = logging.getLogger(__name__)

# Substituted for records whose text field is empty
PLACEHOLDER = "ERROR"

# Largest value accepted by csv.field_size_limit on every platform
FIELD_SIZE_LIMIT = 2**31 - 1


def _decode_lines(raw_lines: Iterable[bytes], bad_lines: set[int]) -> Iterator[str]:
    """Decode file lines one at a time, noting line numbers that are not UTF-8.

    Args:
        raw_lines: Lines read from the file in binary mode
        bad_lines: Collects the 1-based numbers of undecodable lines
    """
    for line_num, raw in enumerate(raw_lines, start=1):
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError:
            bad_lines.add(line_num)
            yield raw.decode("utf-8", errors="replace")


class TodoStore:
    """Reads and writes the todo list to a CSV file."""

    def __init__(self, data_path: Path):
        """Initialize todo store.

        Args:
            data_path: Path of the CSV file backing the list
        """
        self.data_path = data_path

    def read(self) -> list[str]:
        """Load todo items from disk.

        Records that cannot be decoded or parsed are skipped with a warning.

        Returns:
            Items in file order

        Raises:
            StorageError: If the file is missing or cannot be read
        """
        if csv.field_size_limit() < FIELD_SIZE_LIMIT:
            csv.field_size_limit(FIELD_SIZE_LIMIT)

        items: list[str] = []
        bad_lines: set[int] = set()
        try:
            with self.data_path.open("rb") as f:
                reader = csv.reader(_decode_lines(f, bad_lines))
                while True:
                    first_line = reader.line_num + 1
                    try:
                        record = next(reader)
                    except StopIteration:
                        break
                    except csv.Error as err:
                        logger.warning(f"Skipping unparsable record on line {first_line}: {err}")
                        if reader.line_num < first_line:
                            break
                        continue

                    if bad_lines.intersection(range(first_line, reader.line_num + 1)):
                        logger.warning(f"Skipping undecodable record on line {first_line}")
                        continue
                    if not record:
                        continue
                    if len(record) > 1:
                        logger.warning(
                            f"Skipping malformed record on line {first_line} "
                            f"({len(record)} fields)"
                        )
                        continue
                    items.append(record[0] or PLACEHOLDER)
        except OSError as err:
            raise StorageError(f"Failed to read {self.data_path}: {err}") from err

        logger.debug(f"Read {len(items)} todo(s) from {self.data_path}")
        return items

    def write(self, items: Sequence[str]) -> None:
        """Rewrite the file with the given items.

        Args:
            items: Todo texts to persist, in order

        Raises:
            StorageError: If the file cannot be written
        """
        try:
            self.data_path.parent.mkdir(parents=True, exist_ok=True)
            with self.data_path.open("w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f)
                writer.writerows([item] for item in items)
        except (OSError, csv.Error) as err:
            raise StorageError(f"Failed to write {self.data_path}: {err}") from err

        logger.debug(f"Wrote {len(items)} todo(s) to {self.data_path}")
