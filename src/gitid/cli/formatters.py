"""Output formatters for CLI commands."""

from __future__ import annotations

import json
import sys
from typing import Any


class TableFormatter:
    """Format data as a text table."""

    def __init__(self, headers: list[str], min_widths: dict[str, int] | None = None) -> None:
        self.headers = headers
        self.min_widths = min_widths or {}

    def format(self, rows: list[dict[str, Any]]) -> str:
        """Format rows as a table."""
        if not rows:
            return "(no data)"

        widths = {}
        for header in self.headers:
            min_width = self.min_widths.get(header, 0)
            max_data_width = max(len(str(row.get(header, ""))) for row in rows)
            widths[header] = max(len(header), max_data_width, min_width)

        fmt = "  ".join(f"{{:<{widths[h]}}}" for h in self.headers)

        lines = [fmt.format(*self.headers)]
        lines.append(fmt.format(*["-" * widths[h] for h in self.headers]))

        for row in rows:
            values = [str(row.get(h, "")) for h in self.headers]
            lines.append(fmt.format(*values).rstrip())

        return "\n".join(lines)


def print_table(headers: list[str], rows: list[dict[str, Any]]) -> None:
    """Print data as a table."""
    print(TableFormatter(headers).format(rows))


def print_json(data: Any) -> None:
    """Print data as JSON."""
    print(json.dumps(data, indent=2, default=str))


def print_success(message: str) -> None:
    """Print a success message."""
    print(f"[+] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    print(f"[!] {message}", file=sys.stderr)


def print_info(message: str) -> None:
    """Print an info message."""
    print(f"[*] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    print(f"[~] {message}")
