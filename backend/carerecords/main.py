# carerecords/main.py
import logging
import sys
from typing import Optional

from carerecords import config
from carerecords.paths import FilePathResolver
from carerecords.store import RecordStore

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_store(base_dir: Optional[str] = None) -> RecordStore:
    """Build the application context rooted at ``base_dir`` (or the configured base directory)."""
    return RecordStore(resolver=FilePathResolver(base_dir))


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    store = create_store(argv[0] if argv else None)
    try:
        store.load_all_data()
    except OSError as e:
        logger.error(f"❌ Error loading data: {e}")
        return 1

    print(store.summary_frame().to_string(index=False))
    for name, repo in store.repositories().items():
        for warning in repo.parse_warnings:
            print(f"⚠️ {name}: {warning}")
    for warning in store.referral_manager.parse_warnings:
        print(f"⚠️ referrals: {warning}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
