# src/srdn/utils/utils_files.py

import json
import re
from pathlib import Path
from typing import Any, cast

from srdn.logs import get_app_logger


def _strip_jsonc_comments(text: str) -> str:
    """Strip // and /* */ comments from JSONC while preserving string contents."""
    result: list[str] = []
    in_string = False
    in_escape = False
    i = 0
    while i < len(text):
        ch = text[i]

        if in_escape:
            result.append(ch)
            in_escape = False
            i += 1
            continue

        if in_string:
            if ch == "\\":
                in_escape = True
            elif ch == '"':
                in_string = False
            result.append(ch)
            i += 1
            continue

        if ch == '"':
            in_string = True
            result.append(ch)
            i += 1
            continue

        # line comment
        if text.startswith("//", i):
            while i < len(text) and text[i] != "\n":
                i += 1
            continue

        # block comment
        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = len(text) if end == -1 else end + 2
            continue

        result.append(ch)
        i += 1

    return "".join(result)


def load_jsonc(path: Path) -> dict[str, Any] | list[Any] | None:
    """Load JSONC (JSON with comments and trailing commas)."""
    logger = get_app_logger()
    logger.trace(f"[load_jsonc] Loading from {path}")

    if not path.exists():
        xmsg = f"JSON file not found: {path}"
        raise FileNotFoundError(xmsg)

    if not path.is_file():
        xmsg = f"Expected a file: {path}"
        raise ValueError(xmsg)

    text = path.read_text(encoding="utf-8")
    text = _strip_jsonc_comments(text)

    # Remove trailing commas before } or ]
    text = re.sub(r",(?=\s*[}\]])", "", text)

    text = text.strip()
    if not text:
        # Empty or only comments → interpret as "no config"
        return None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        xmsg = (
            f"Invalid JSON syntax in {path}:"
            f" {e.msg} (line {e.lineno}, column {e.colno})"
        )
        raise ValueError(xmsg) from e

    if not isinstance(data, (dict, list)):
        xmsg = f"Invalid JSON root type: {type(data).__name__}"
        raise ValueError(xmsg)  # noqa: TRY004

    return cast("dict[str, Any] | list[Any]", data)
