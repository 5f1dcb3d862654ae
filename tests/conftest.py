from __future__ import annotations

from pathlib import Path
import sys
from typing import Iterator

import pytest
from fastapi.testclient import TestClient


# Ensure `import geocell.*` works when pytest chooses an import mode that
# doesn't automatically add the project root to sys.path.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


@pytest.fixture()
def client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    monkeypatch.setenv("GEOCELL_DEFAULT_PRECISION", "8")
    monkeypatch.setenv("GEOCELL_ENCODE_CACHE_ENABLED", "true")
    monkeypatch.setenv("GEOCELL_ENCODE_CACHE_MAX_ENTRIES", "100")
    monkeypatch.setenv("GEOCELL_LOG_LEVEL", "DEBUG")

    # Clear settings and cache singletons so env overrides take effect.
    from geocell.core.settings import get_settings
    from geocell.services.encode_cache import get_encode_cache

    get_settings.cache_clear()
    get_encode_cache.cache_clear()

    from geocell.main import create_app

    app = create_app()
    yield TestClient(app)

    get_settings.cache_clear()
    get_encode_cache.cache_clear()
