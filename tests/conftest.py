from pathlib import Path
import sys

import pytest

# Add only the src directory to path, not the project root
project_root = Path(__file__).parent.parent
src_path = str(project_root / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)


@pytest.fixture(autouse=True)
def _clear_discovery_env(monkeypatch):
    """Keep HASS_DISCOVERY_* overrides from the host out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("HASS_DISCOVERY_"):
            monkeypatch.delenv(key, raising=False)
