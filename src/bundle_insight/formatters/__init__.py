"""Output formatters for Bundle Insight."""

from typing import Dict, Type

from .base import BaseFormatter, format_bytes
from .csv_formatter import CsvFormatter
from .json_formatter import JsonFormatter
from .markdown_formatter import MarkdownFormatter
from .quiet_formatter import QuietFormatter
from .rich_formatter import RichFormatter

FORMATTERS: Dict[str, Type[BaseFormatter]] = {
    "rich": RichFormatter,
    "json": JsonFormatter,
    "csv": CsvFormatter,
    "markdown": MarkdownFormatter,
    "quiet": QuietFormatter,
}


def get_formatter(name: str) -> BaseFormatter:
    """Instantiate the formatter registered under ``name`` (case-insensitive).

    Raises:
        ValueError: If no formatter has that name
    """
    try:
        formatter_cls = FORMATTERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown formatter: {name!r}. Choose from: {', '.join(FORMATTERS)}"
        ) from None
    return formatter_cls()


__all__ = [
    "BaseFormatter",
    "RichFormatter",
    "JsonFormatter",
    "CsvFormatter",
    "MarkdownFormatter",
    "QuietFormatter",
    "FORMATTERS",
    "format_bytes",
    "get_formatter",
]
