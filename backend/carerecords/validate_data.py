# carerecords/validate_data.py
import sys
from typing import List, Optional

from carerecords.models.schemas import SCHEMAS
from carerecords.paths import FilePathResolver
from carerecords.utils.csv_codec import CsvCodec


def check_headers(resolver: FilePathResolver, codec: Optional[CsvCodec] = None) -> List[str]:
    """Compare each data file's header with its schema. Returns one message per problem."""
    codec = codec or CsvCodec()
    errors = []
    for entity, schema in SCHEMAS.items():
        path = resolver.entity_file(entity)
        if not path.exists():
            errors.append(f"{entity}: {path} not found")
            continue
        header = codec.read_header(path)
        expected = list(schema.columns)
        if header != expected:
            missing = [c for c in expected if c not in header]
            unexpected = [c for c in header if c not in expected]
            if missing or unexpected:
                errors.append(f"{entity}: missing columns {missing}, unexpected columns {unexpected}")
            else:
                errors.append(f"{entity}: columns out of order, expected {expected}")
    return errors


def validate_data_files(base_dir: Optional[str] = None) -> int:
    resolver = FilePathResolver(base_dir)
    print(f"🔍 Validating data files in {resolver.data_dir}...")

    errors = check_headers(resolver)
    if errors:
        for err in errors:
            print(f"❌ {err}")
        return 1

    print(f"✅ {len(SCHEMAS)} data files validated successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(validate_data_files(sys.argv[1] if len(sys.argv) > 1 else None))
