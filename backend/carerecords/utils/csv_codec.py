# carerecords/utils/csv_codec.py
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from carerecords import config

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
Row = List[str]

_NEEDS_QUOTING = (",", '"', "\n", "\r")


class CsvCodec:
    """
    Line/field level CSV parsing and formatting.

    Fields are comma separated except inside a quoted span. A doubled quote
    inside a quoted span is a literal quote, any other quote toggles quoted
    mode. Line breaks belong to the field only when the field opens with its
    quote; a quote opened mid-field is closed by the end of its line.

    Every field is stripped of surrounding whitespace after extraction. With
    ``trim_quoted=False`` only the whitespace outside the quoted span is
    stripped, so quoted content survives exactly.
    """

    def __init__(self, trim_quoted: Optional[bool] = None):
        self.trim_quoted = config.TRIM_QUOTED if trim_quoted is None else trim_quoted

    # ------------------------------- Decoding -------------------------------
    def decode(self, text: str) -> List[Row]:
        """Parse CSV text, skipping the header row."""
        return self.decode_with_header(text)[1:]

    def decode_with_header(self, text: str) -> List[Row]:
        """Parse CSV text, keeping the header as the first row."""
        rows, unterminated_at = self._parse(text, 0, multiline=True)
        if unterminated_at is not None:
            # A quote never closed: read the rest line by line instead of as one field.
            tail, _ = self._parse(text, unterminated_at, multiline=False)
            rows.extend(tail)
        return rows

    def _parse(self, text: str, start: int, multiline: bool) -> Tuple[List[Row], Optional[int]]:
        """
        Parse ``text`` from ``start``. Returns the rows and, when the input ends
        inside a multi-line quoted field, the offset of the record it belongs to
        (that record is left out of the rows).
        """
        rows: List[Row] = []
        row: Row = []
        field: List[str] = []
        in_quotes = False
        span_at_start = False
        q_start: Optional[int] = None
        q_end: Optional[int] = None
        record_start = start
        i = start
        n = len(text)

        while i < n:
            c = text[i]
            if c == '"':
                if in_quotes and i + 1 < n and text[i + 1] == '"':
                    field.append('"')
                    i += 2
                    continue
                in_quotes = not in_quotes
                if in_quotes:
                    if q_start is None:
                        q_start = len(field)
                        span_at_start = not "".join(field).strip()
                    else:
                        span_at_start = False
                else:
                    q_end = len(field)
            elif c == "," and not in_quotes:
                row.append(self._finish_field(field, q_start, q_end))
                field, q_start, q_end, span_at_start = [], None, None, False
            elif c in "\r\n" and not (in_quotes and multiline and span_at_start):
                # only a field that opens with a quote may span lines
                in_quotes = False
                if c == "\r" and i + 1 < n and text[i + 1] == "\n":
                    i += 1
                if row or field or q_start is not None:
                    row.append(self._finish_field(field, q_start, q_end))
                    rows.append(row)
                # blank lines carry no record
                row, field, q_start, q_end, span_at_start = [], [], None, None, False
                record_start = i + 1
            else:
                field.append(c)
            i += 1

        if in_quotes and multiline and span_at_start:
            return rows, record_start
        if row or field or q_start is not None:
            row.append(self._finish_field(field, q_start, q_end))
            rows.append(row)
        return rows, None

    def _finish_field(self, field: List[str], q_start: Optional[int], q_end: Optional[int]) -> str:
        value = "".join(field)
        if q_start is None or self.trim_quoted:
            return value.strip()
        if q_end is None or q_end < q_start:
            q_end = len(value)
        return value[:q_start].lstrip() + value[q_start:q_end] + value[q_end:].rstrip()

    # ------------------------------- Encoding -------------------------------
    def escape(self, value: Optional[object]) -> str:
        """Format a single value for a CSV line."""
        if value is None:
            return ""
        text = str(value)
        needs_quotes = any(ch in text for ch in _NEEDS_QUOTING)
        if not self.trim_quoted and text != text.strip():
            needs_quotes = True
        if needs_quotes:
            return '"' + text.replace('"', '""') + '"'
        return text

    def encode_line(self, values: Sequence[Optional[object]]) -> str:
        return ",".join(self.escape(v) for v in values)

    def encode(self, header: Sequence[str], rows: Iterable[Sequence[Optional[object]]]) -> str:
        lines = [self.encode_line(header)]
        lines.extend(self.encode_line(row) for row in rows)
        return "\n".join(lines) + "\n"

    # ------------------------------- Files -------------------------------
    def read_rows(self, path: PathLike) -> List[Row]:
        """Read a CSV file and return its data rows (header skipped)."""
        return self.decode(self._read_text(path))

    def read_rows_with_header(self, path: PathLike) -> List[Row]:
        return self.decode_with_header(self._read_text(path))

    def read_header(self, path: PathLike) -> Row:
        rows = self.read_rows_with_header(path)
        return rows[0] if rows else []

    def write_file(self, path: PathLike, header: Sequence[str], rows: Iterable[Sequence[Optional[object]]]) -> None:
        """Overwrite ``path`` with the header and rows."""
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(self.encode(header, rows))

    def append_rows(self, path: PathLike, rows: Iterable[Sequence[Optional[object]]]) -> int:
        """Append rows to an existing file without rewriting it. Returns the count written."""
        count = 0
        with open(path, "a", encoding="utf-8", newline="") as f:
            for row in rows:
                f.write(self.encode_line(row) + "\n")
                count += 1
        logger.debug(f"Appended {count} rows to {path}")
        return count

    @staticmethod
    def _read_text(path: PathLike) -> str:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
