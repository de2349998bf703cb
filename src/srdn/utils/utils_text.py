# src/srdn/utils/utils_text.py

import re
from pathlib import Path
from typing import Any


def plural(obj: Any) -> str:
    """Return 's' if obj represents a plural count.

    Accepts ints, floats, and any object implementing __len__().
    """
    count: int | float
    try:
        count = len(obj)
    except TypeError:
        count = obj if isinstance(obj, (int, float)) else 0
    return "s" if count != 1 else ""


def remove_path_in_error_message(inner_msg: str, path: Path) -> str:
    """Remove redundant file path mentions (and nearby filler)
    from error messages.

    Example:
        "Invalid JSON syntax in /abs/path/package.json: Expecting value"
        → "Invalid JSON syntax: Expecting value"

    """
    full_path = str(path)
    filename = path.name

    candidates = [
        f"in {full_path}",
        f"in '{full_path}'",
        f'in "{full_path}"',
        f"in {filename}",
        f"in '{filename}'",
        f'in "{filename}"',
        full_path,
        filename,
    ]

    clean_msg = inner_msg
    for pattern in candidates:
        clean_msg = clean_msg.replace(pattern, "").strip(": ").strip()

    clean_msg = re.sub(r"\s{2,}", " ", clean_msg)
    return re.sub(r"\s*:\s*", ": ", clean_msg)
