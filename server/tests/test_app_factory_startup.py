from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from random_line.api.main import create_app
from random_line.core.config.settings import Settings


def test_app_factory_and_health_endpoints(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("APP__LINES_ROOT", str(tmp_path / "missing"))
    app = create_app(Settings())
    client: TestClient = TestClient(app)

    r1 = client.get("/healthz")
    assert r1.status_code == 200
    assert '"status"' in r1.text and '"ok"' in r1.text

    r2 = client.get("/readyz")
    assert r2.status_code == 503
    assert '"degraded"' in r2.text

    (tmp_path / "missing").mkdir()
    r3 = client.get("/readyz")
    assert r3.status_code == 200
    assert '"ready"' in r3.text
