# tests/utils/__init__.py

from .config_validate import make_summary
from .constants import DEFAULT_TEST_LOG_LEVEL, PROJ_ROOT
from .fakes import FakeResolver, MemoryLister, MemoryProvider
from .patch_everywhere import patch_everywhere
from .project import write_css, write_package_json
from .trace import TEST_TRACE, make_test_trace


__all__ = [  # noqa: RUF022
    # config_validate
    "make_summary",
    # constants
    "DEFAULT_TEST_LOG_LEVEL",
    "PROJ_ROOT",
    # fakes
    "FakeResolver",
    "MemoryLister",
    "MemoryProvider",
    # patch_everywhere
    "patch_everywhere",
    # project
    "write_css",
    "write_package_json",
    # trace
    "TEST_TRACE",
    "make_test_trace",
]
