# carerecords/utils/ids.py
from typing import Iterable, Optional


def next_sequential_id(existing_ids: Iterable[Optional[str]], prefix: str, width: int = 3) -> str:
    """
    Next ID after the highest numeric suffix in use for ``prefix``.

    IDs without the prefix or with a non-numeric suffix are ignored.
    ``next_sequential_id(["X001", "X005", "X003"], "X")`` -> ``"X006"``.
    """
    highest = 0
    for record_id in existing_ids:
        if not record_id or not record_id.startswith(prefix):
            continue
        suffix = record_id[len(prefix):]
        if not suffix.isdecimal():
            continue
        highest = max(highest, int(suffix))
    return f"{prefix}{highest + 1:0{width}d}"
