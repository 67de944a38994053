# carerecords/services/repository.py
import logging
from datetime import date
from pathlib import Path
from typing import Callable, Generic, Iterable, List, Optional, Sequence, Union

import pandas as pd

from carerecords.models.schemas import RecordT, SchemaDescriptor
from carerecords.utils.csv_codec import CsvCodec
from carerecords.utils.ids import next_sequential_id
from carerecords.utils.parsing import ParseWarning, WarningCollector

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class RecordRepository(Generic[RecordT]):
    """
    In-memory, CSV-backed collection of one entity type.

    Mutations only touch memory; nothing is durable until ``save_all``
    rewrites the backing file. Records handed out are copies, so callers
    cannot reach the internal list.
    """

    def __init__(self, schema: SchemaDescriptor, path: Optional[PathLike] = None, codec: Optional[CsvCodec] = None):
        self.schema = schema
        self.path = Path(path) if path is not None else None
        self.codec = codec or CsvCodec()
        self._records: List[RecordT] = []
        self._parse_warnings: List[ParseWarning] = []

    # ------------------------------- Persistence -------------------------------
    def _resolve(self, path: Optional[PathLike]) -> Path:
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError(f"No file path configured for {self.schema.entity}")
        return target

    def load_all(self, path: Optional[PathLike] = None) -> int:
        """Replace the in-memory records with the file contents. Returns the record count."""
        target = self._resolve(path)
        rows = self.codec.read_rows(target)
        collector = WarningCollector()
        records: List[RecordT] = []
        skipped = 0
        for row in rows:
            if len(row) < self.schema.required_columns:
                skipped += 1
                continue
            records.append(self.schema.decode_row(row, collector))

        self._records = records
        self._parse_warnings = collector.warnings
        if skipped:
            logger.debug(f"Dropped {skipped} short rows from {target}")
        logger.info(f"Loaded {len(records)} {self.schema.entity} from {target}")
        return len(records)

    def save_all(self, path: Optional[PathLike] = None) -> None:
        """Overwrite the backing file with every in-memory record."""
        target = self._resolve(path)
        rows = [self.schema.encode_row(r) for r in self._records]
        self.codec.write_file(target, self.schema.columns, rows)
        logger.info(f"Saved {len(rows)} {self.schema.entity} to {target}")

    def append_to_file(self, records: Iterable[RecordT], path: Optional[PathLike] = None) -> int:
        """Append records to the backing file without rewriting it (memory is untouched)."""
        target = self._resolve(path)
        return self.codec.append_rows(target, (self.schema.encode_row(r) for r in records))

    @property
    def parse_warnings(self) -> List[ParseWarning]:
        """Cells that degraded to a default during the last load."""
        return list(self._parse_warnings)

    # ------------------------------- Queries -------------------------------
    def get_all(self) -> List[RecordT]:
        return [r.model_copy(deep=True) for r in self._records]

    def get_by_id(self, record_id: str) -> Optional[RecordT]:
        for record in self._records:
            if self.schema.record_id(record) == record_id:
                return record.model_copy(deep=True)
        return None

    def filter(self, predicate: Callable[[RecordT], bool]) -> List[RecordT]:
        return [r.model_copy(deep=True) for r in self._records if predicate(r)]

    def find_by(self, field: str, value: str) -> List[RecordT]:
        """Exact match on a field, e.g. a foreign key."""
        return self.filter(lambda r: getattr(r, field) == value)

    def find_by_category(self, field: str, value: str) -> List[RecordT]:
        """Case-insensitive exact match, for status/role/type style fields."""
        wanted = (value or "").lower()
        return self.filter(lambda r: (getattr(r, field) or "").lower() == wanted)

    def find_by_date(self, field: str, value: date) -> List[RecordT]:
        return self.filter(lambda r: getattr(r, field) is not None and getattr(r, field) == value)

    def search(self, term: str, fields: Sequence[str]) -> List[RecordT]:
        """Case-insensitive substring match across one or more text fields."""
        needle = (term or "").lower()
        return self.filter(lambda r: any(needle in (getattr(r, f) or "").lower() for f in fields))

    def count(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------- Mutations -------------------------------
    def add(self, record: RecordT) -> None:
        self._records.append(record.model_copy(deep=True))

    def update(self, record: RecordT) -> bool:
        """Replace the first record with the same ID. False when no record matches."""
        record_id = self.schema.record_id(record)
        for index, existing in enumerate(self._records):
            if self.schema.record_id(existing) == record_id:
                self._records[index] = record.model_copy(deep=True)
                return True
        return False

    def modify(self, record_id: str, **changes) -> bool:
        """Set fields on the stored record in place. False when no record matches."""
        for record in self._records:
            if self.schema.record_id(record) == record_id:
                for name, value in changes.items():
                    setattr(record, name, value)
                return True
        return False

    def delete(self, record_id: str) -> bool:
        for index, existing in enumerate(self._records):
            if self.schema.record_id(existing) == record_id:
                del self._records[index]
                return True
        return False

    def clear(self) -> None:
        self._records = []

    def replace_all(self, records: Iterable[RecordT]) -> None:
        self._records = [r.model_copy(deep=True) for r in records]

    def next_id(self) -> str:
        if self.schema.id_prefix is None:
            raise ValueError(f"{self.schema.entity} IDs are supplied by the caller")
        return next_sequential_id(
            (self.schema.record_id(r) for r in self._records),
            self.schema.id_prefix,
            self.schema.id_width,
        )

    # ------------------------------- Tabular view -------------------------------
    def to_frame(self) -> pd.DataFrame:
        """Records as a DataFrame of their on-disk string form, one column per schema column."""
        rows = [self.schema.encode_row(r) for r in self._records]
        return pd.DataFrame(rows, columns=list(self.schema.columns))
