"""
Integration Test Configuration

Integration tests build JSONL catalogs under tmp_path and run discovery
operations end to end. When running in CI (CI=true), tests marked slow
(large generated catalogs) are skipped.
"""

import os

import pytest


@pytest.fixture
def is_ci_environment() -> bool:
    """
    Detect if tests are running in CI environment.

    Returns:
        True if CI environment variable is set to 'true'
    """
    return os.getenv("CI", "").lower() == "true"


@pytest.fixture(autouse=True)
def skip_slow_tests_in_ci(request, is_ci_environment):
    """Skip @pytest.mark.slow catalog tests when running in CI."""
    if is_ci_environment and request.node.get_closest_marker("slow"):
        pytest.skip("Skipping slow catalog test in CI environment")
