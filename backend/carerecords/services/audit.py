# carerecords/services/audit.py
import logging
import threading
from datetime import datetime
from typing import Callable, List, Optional

from carerecords import config

logger = logging.getLogger(__name__)


class AuditLog:
    """
    Append-only, timestamped record of referral mutations.

    Entries read ``[yyyy-MM-dd HH:mm:ss] message``. Readers get a copy; there
    is no way to edit or drop an entry once written.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._entries: List[str] = []
        self._lock = threading.Lock()
        self._clock = clock or datetime.now

    def record(self, message: str) -> str:
        stamp = self._clock().strftime(config.AUDIT_TIMESTAMP_FORMAT)
        entry = f"[{stamp}] {message}"
        with self._lock:
            self._entries.append(entry)
        logger.info(f"AUDIT {message}")
        return entry

    def entries(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
