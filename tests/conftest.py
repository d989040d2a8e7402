"""
Shared pytest configuration
"""
import os
import sys

import pytest

# Add src to path for runs without an installed package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from canvasdmx.core.logger import CanvasDmxLogger, DebugCategories  # noqa: E402


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Every test starts with all debug categories on and no handlers installed"""
    DebugCategories.initialize()
    yield
    DebugCategories.initialize()
    CanvasDmxLogger().close()
