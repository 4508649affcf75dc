import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

# Ensure the project root is importable when pytest starts from any directory
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from symdiff.expression import poly_from_string  # noqa: E402


@pytest.fixture
def poly():
    """Parse polynomial text straight into an expression tree."""
    return poly_from_string


@pytest.fixture
def console():
    """Console writing plain text into a buffer, read back with .file.getvalue()."""
    return Console(
        file=io.StringIO(), color_system=None, highlight=False, soft_wrap=True
    )
