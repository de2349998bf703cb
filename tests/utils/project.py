# tests/utils/project.py

import json
from pathlib import Path
from typing import Any

import srdn.meta as mod_meta


def write_package_json(root: Path, **fields: Any) -> Path:
    """Write a package.json manifest with the given top-level fields."""
    root.mkdir(parents=True, exist_ok=True)
    path = root / mod_meta.PROGRAM_CONFIG
    path.write_text(json.dumps(fields, indent=2), encoding="utf-8")
    return path


def write_css(path: Path, code: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(code, encoding="utf-8")
    return path
