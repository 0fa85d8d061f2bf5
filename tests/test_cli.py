import json
import logging
from pathlib import Path

import pytest

from finsync.cli.main import main
from finsync.runtime.logging import set_log_level


@pytest.fixture(autouse=True)
def _simulation_only_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FINSYNC_VISION_API_KEY", raising=False)
    monkeypatch.setenv("FINSYNC_SIMULATED_DELAY", "0")


@pytest.fixture
def receipt_image(tmp_path: Path) -> Path:
    image = tmp_path / "receipt.jpg"
    image.write_bytes(b"fake jpeg")
    return image


def test_scan_prints_json(receipt_image: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["scan", str(receipt_image), "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["ocr_method"] == "simulation"
    assert payload["extracted_data"]["total"] > 0


def test_scan_prints_summary(receipt_image: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["scan", str(receipt_image)]) == 0

    out = capsys.readouterr().out
    assert "OCR method:  simulation" in out
    assert "Total" in out


def test_scan_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["scan", str(tmp_path / "missing.jpg")]) == 1
    assert "Receipt file not found" in capsys.readouterr().out


def test_scan_without_simulation_fails(receipt_image: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["scan", str(receipt_image), "--no-simulation"]) == 1
    assert "OCR failed" in capsys.readouterr().out


def test_status_without_api_key(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["status"]) == 1

    out = capsys.readouterr().out
    assert "disabled" in out
    assert "Google Vision API not configured" in out


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out.lower()


def test_serve_uses_default_port(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    import uvicorn

    from finsync.runtime.config import DEFAULT_PORT

    calls: list[dict] = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))

    assert main(["serve"]) == 0
    assert calls == [{"host": "0.0.0.0", "port": DEFAULT_PORT}]
    assert f":{DEFAULT_PORT}/ocr" in capsys.readouterr().out


def test_debug_flag_raises_log_level(receipt_image: Path) -> None:
    logger = logging.getLogger("finsync")
    previous = logger.level
    try:
        assert main(["--debug", "scan", str(receipt_image), "--json"]) == 0
        assert logger.level == logging.DEBUG
    finally:
        set_log_level(previous)
