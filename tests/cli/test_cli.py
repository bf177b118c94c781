from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from banregistry import cli
from banregistry.services.force_certification import ForceCertificationResult


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    from banregistry.config.settings import get_settings

    monkeypatch.setenv("LOGS_DIR", str(tmp_path / "logs"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def no_log_handlers(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: logging.getLogger("banregistry.tests.cli"))


def test_read_codes_skips_blank_and_comment_lines(tmp_path: Path) -> None:
    path = tmp_path / "communes.txt"
    path.write_text("# communes en certification forcée\n01001\n\n  49092 \n", encoding="utf-8")

    assert cli.read_codes(path) == ["01001", "49092"]


def test_force_certification_command(tmp_path: Path, monkeypatch, capsys) -> None:
    path = tmp_path / "communes.txt"
    path.write_text("01001\n", encoding="utf-8")

    registry = MagicMock()
    registry.force_certification.update_communes_force_certification.return_value = ForceCertificationResult(
        communes_added=["01001"],
        communes_removed=["75056"],
        composition_errors={"75056": RuntimeError("redis down")},
    )
    monkeypatch.setattr("banregistry.services.registry.get_registry", lambda: registry)

    exit_code = cli.main(["force-certification", str(path)])

    registry.force_certification.update_communes_force_certification.assert_called_once_with(["01001"])
    assert exit_code == 1
    captured = capsys.readouterr()
    assert "01001" in captured.out
    assert "75056: redis down" in captured.err


def test_requeue_command(monkeypatch, capsys) -> None:
    registry = MagicMock()
    registry.composition.requeue_asked_compositions.return_value = [object(), object()]
    monkeypatch.setattr("banregistry.services.registry.get_registry", lambda: registry)

    assert cli.main(["requeue"]) == 0
    assert "2 composition(s)" in capsys.readouterr().out
