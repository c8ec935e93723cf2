import os
from collections.abc import Callable

import pytest
from hypothesis import settings

from alpha.alpha_ast import Program
from alpha.alpha_parser import parse_source

settings.register_profile("ci", max_examples=300, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))

# Start coverage in subprocesses spawned by CLI tests
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()


@pytest.fixture  # type: ignore[misc]
def parse() -> Callable[[str], Program]:
    return parse_source
