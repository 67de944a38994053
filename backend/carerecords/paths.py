# carerecords/paths.py
from pathlib import Path
from typing import Dict, Optional, Union

from carerecords import config
from carerecords.exceptions import UnknownEntityError

# Logical entity name -> data file name
ENTITY_FILES: Dict[str, str] = {
    "patients": "patients.csv",
    "clinicians": "clinicians.csv",
    "facilities": "facilities.csv",
    "appointments": "appointments.csv",
    "prescriptions": "prescriptions.csv",
    "referrals": "referrals.csv",
    "staff": "staff.csv",
}


class FilePathResolver:
    """
    Maps logical entity names to files under a base directory.

    Data files live in ``<base>/data`` and generated documents in
    ``<base>/output``. Nothing is created until it is asked for.
    """

    def __init__(self, base_dir: Optional[Union[str, Path]] = None):
        self.base_dir = Path(base_dir or config.BASE_DIR)

    @property
    def data_dir(self) -> Path:
        return self.base_dir / config.DATA_DIRNAME

    @property
    def output_dir(self) -> Path:
        return self.base_dir / config.OUTPUT_DIRNAME

    def data_file(self, filename: str) -> Path:
        return self.data_dir / filename

    def entity_file(self, entity: str) -> Path:
        try:
            return self.data_file(ENTITY_FILES[entity])
        except KeyError:
            raise UnknownEntityError(f"No data file registered for entity '{entity}'") from None

    def output_file(self, filename: str) -> Path:
        """Path inside the output directory, creating the directory if needed."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir / filename

    def ensure_data_dir(self) -> Path:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir

    @staticmethod
    def file_exists(path: Union[str, Path]) -> bool:
        return Path(path).exists()
