"""Quote-aware CSV splitting into header-keyed records.

This is deliberately simpler than RFC 4180: every double quote toggles the
in-quotes flag and is dropped, so doubled quotes are not treated as escapes.
"""

import logging
from pathlib import Path

from agencyledger.domain.errors import DocumentReadError, ValidationError

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"


def parse_csv_line(line: str) -> list[str]:
    """Split one CSV line into raw (untrimmed) fields.

    Args:
        line: A single line of CSV text

    Returns:
        List of field strings
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

    fields.append("".join(current))
    return fields


def _is_data_row(row: dict[str, str]) -> bool:
    """A row is kept if any value is non-empty and not a comment."""
    return any(value and not value.startswith(COMMENT_PREFIX) for value in row.values())


def parse_csv_text(text: str) -> list[dict[str, str]]:
    """Parse CSV text into records keyed by lower-cased header names.

    Blank lines, all-empty rows and comment rows are dropped. Missing
    trailing values become empty strings.

    Args:
        text: Raw CSV content

    Returns:
        List of records

    Raises:
        ValidationError: If the text contains no lines at all
    """
    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        raise ValidationError("CSV file is empty")

    headers = [header.strip().lower() for header in parse_csv_line(lines[0])]
    logger.debug("CSV headers found: %s", headers)

    records: list[dict[str, str]] = []
    for line in lines[1:]:
        values = parse_csv_line(line)
        row = {
            header: (values[index].strip() if index < len(values) else "")
            for index, header in enumerate(headers)
        }
        if _is_data_row(row):
            records.append(row)

    logger.debug("Parsed %d CSV data rows", len(records))
    return records


def parse_csv_file(csv_file_path: str | Path) -> list[dict[str, str]]:
    """Read and parse a CSV file.

    Args:
        csv_file_path: Path to CSV file

    Returns:
        List of records

    Raises:
        DocumentReadError: If the file cannot be read
        ValidationError: If the file is empty
    """
    csv_path = Path(csv_file_path)
    try:
        text = csv_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentReadError(f"Failed to read CSV file '{csv_path.name}': {e}") from e
    return parse_csv_text(text)
