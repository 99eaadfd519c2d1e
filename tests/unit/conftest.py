"""
Pytest configuration and fixtures for refinery tests.
"""
import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from refinery import config  # noqa: E402


@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts from default settings."""
    config.reset_settings()
    config.configure()
    yield
    config.reset_settings()
