# tests/utils/trace.py
"""Diagnostic trace lines for debugging the test suite itself.

Written straight to sys.__stderr__ so they bypass pytest's capture.
Enable with TEST_TRACE=1.
"""

import builtins
import os
import sys
import time
from collections.abc import Callable
from typing import Any


TEST_TRACE_ENABLED = os.getenv("TEST_TRACE", "").lower() in {"1", "true", "yes"}


def TEST_TRACE(label: str, *args: Any, icon: str = "🧪") -> None:  # noqa: N802
    if not TEST_TRACE_ENABLED:
        return
    builtins.print(
        f"{icon} [TEST TRACE {time.monotonic():.6f}] {label}",
        *args,
        file=sys.__stderr__,
        flush=True,
    )


def make_test_trace(icon: str = "🧪") -> Callable[..., Any]:
    def local_trace(label: str, *args: Any) -> Any:
        return TEST_TRACE(label, *args, icon=icon)

    return local_trace
