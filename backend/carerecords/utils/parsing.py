# carerecords/utils/parsing.py
"""
Lenient cell conversion.

A malformed cell never costs the row: it degrades to the field default
(``None`` for dates and times, ``0`` for integers) and a ``ParseWarning`` is
handed to the caller's sink so the degradation stays observable.
"""
import logging
from datetime import date, datetime, time
from typing import Callable, List, Optional

from pydantic import BaseModel

from carerecords import config

logger = logging.getLogger(__name__)


class ParseWarning(BaseModel):
    record_id: str = ""
    column: str
    value: str
    expected: str

    def __str__(self) -> str:
        return f"{self.record_id or '?'}.{self.column}: could not read '{self.value}' as {self.expected}"


WarningSink = Callable[[ParseWarning], None]


class WarningCollector:
    """Collects parse warnings for one load pass."""

    def __init__(self):
        self.warnings: List[ParseWarning] = []

    def __call__(self, warning: ParseWarning) -> None:
        logger.warning(f"Lenient parse: {warning}")
        self.warnings.append(warning)


def _report(sink: Optional[WarningSink], column: str, value: str, expected: str, record_id: str) -> None:
    if sink is not None:
        sink(ParseWarning(record_id=record_id, column=column, value=value, expected=expected))


def parse_date(value: Optional[str], column: str = "", sink: Optional[WarningSink] = None, record_id: str = "") -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.strptime(value, config.DATE_FORMAT).date()
    except ValueError:
        _report(sink, column, value, "date (yyyy-MM-dd)", record_id)
        return None


def parse_time(value: Optional[str], column: str = "", sink: Optional[WarningSink] = None, record_id: str = "") -> Optional[time]:
    if not value:
        return None
    try:
        return datetime.strptime(value, config.TIME_FORMAT).time()
    except ValueError:
        _report(sink, column, value, "time (HH:mm)", record_id)
        return None


def parse_int(value: Optional[str], column: str = "", sink: Optional[WarningSink] = None, record_id: str = "") -> int:
    # An empty integer cell is malformed too: the legacy files always carry a number.
    try:
        return int(value)
    except (TypeError, ValueError):
        _report(sink, column, value or "", "integer", record_id)
        return 0


def format_date(value: Optional[date]) -> str:
    return value.strftime(config.DATE_FORMAT) if value else ""


def format_time(value: Optional[time]) -> str:
    return value.strftime(config.TIME_FORMAT) if value else ""
