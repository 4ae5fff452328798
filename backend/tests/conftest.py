import sys
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture(autouse=True)
def _reset_default_search_service():
    """Tests must not share the module-level SearchService between runs."""
    import services.search as search_module

    search_module._default_search_service = None
    yield
    search_module._default_search_service = None
