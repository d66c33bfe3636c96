import json
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, Mock, patch

import pytest
from typer.testing import CliRunner

from conftest import alerts_payload, current_payload, forecast_payload
from cityweather.cli import TEST_CONFIG_YAML, app
from cityweather.settings.user import UserSettings

runner = CliRunner()


def _response(status: int, body: object) -> Mock:
    resp = Mock()
    resp.status_code = status
    resp.text = json.dumps(body)
    resp.json.return_value = body
    return resp


def fake_openweather(url: str, params: dict[str, Any] | None = None, timeout: float = 0) -> Mock:
    params = params or {}
    if url.endswith("/weather"):
        if params.get("q") == "Atlantis":
            return _response(404, {"cod": "404", "message": "city not found"})
        return _response(200, current_payload(name=params.get("q", "Rabat")))
    if url.endswith("/forecast"):
        return _response(200, forecast_payload(40))
    return _response(200, alerts_payload())


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(TEST_CONFIG_YAML + f"favorites_file: {tmp_path / 'favorites.json'}\n")
    return path


@pytest.fixture
def mock_get() -> Generator[MagicMock, None, None]:
    with patch("cityweather.weather.api.requests.get", side_effect=fake_openweather) as mocked:
        yield mocked


def test_show_city(config_file: Path, mock_get: MagicMock) -> None:
    result = runner.invoke(app, ["show", "Rabat", "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert "Rabat, MA" in result.stdout
    assert "21°C  clear sky" in result.stdout
    assert "Forecast:" in result.stdout
    assert "  2024-05-03  18°C" in result.stdout
    assert "ALERT: Strong wind warning (DGM Maroc)" in result.stdout
    assert mock_get.call_count == 3


def test_show_unknown_city_exits_nonzero(config_file: Path, mock_get: MagicMock) -> None:
    result = runner.invoke(app, ["show", "Atlantis", "--config", str(config_file)])

    assert result.exit_code == 1
    assert "City not found: Atlantis" in result.stdout
    assert mock_get.call_count == 1


def test_here_uses_fixed_location(config_file: Path, mock_get: MagicMock) -> None:
    result = runner.invoke(app, ["here", "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert "Rabat, MA" in result.stdout
    first_params = mock_get.call_args_list[0].kwargs["params"]
    assert first_params["lat"] == 34.0209
    assert first_params["lon"] == -6.8416


def test_favorites_toggle_and_list(config_file: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["favorites", "toggle", "Paris", "--config", str(config_file)])
    assert result.exit_code == 0, result.output
    assert "Added Paris. Favorites: Paris" in result.stdout

    stored = json.loads((tmp_path / "favorites.json").read_text(encoding="utf-8"))
    assert stored == {"favoritesCities": ["Paris"]}

    result = runner.invoke(app, ["favorites", "list", "--config", str(config_file)])
    assert "Paris" in result.stdout.splitlines()

    result = runner.invoke(app, ["favorites", "toggle", "Paris", "--config", str(config_file)])
    assert "Removed Paris. Favorites: (none)" in result.stdout

    result = runner.invoke(app, ["favorites", "list", "--config", str(config_file)])
    assert "No favorites yet." in result.stdout


def test_favorites_toggle_no_persist(config_file: Path, tmp_path: Path) -> None:
    result = runner.invoke(
        app, ["favorites", "toggle", "Paris", "--no-persist", "--config", str(config_file)]
    )

    assert result.exit_code == 0, result.output
    assert not (tmp_path / "favorites.json").exists()


def test_favorites_open_marks_favorite(
    config_file: Path, tmp_path: Path, mock_get: MagicMock
) -> None:
    (tmp_path / "favorites.json").write_text(json.dumps({"favoritesCities": ["Paris"]}))

    result = runner.invoke(app, ["favorites", "open", "Paris", "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert "Paris, MA *" in result.stdout


def test_config_validate(config_file: Path, tmp_path: Path) -> None:
    result = runner.invoke(app, ["config", "validate", str(config_file)])
    assert result.exit_code == 0
    assert "Config valid" in result.stdout

    bad = tmp_path / "bad.yaml"
    bad.write_text("api_key: short\n")
    result = runner.invoke(app, ["config", "validate", str(bad)])
    assert result.exit_code == 1


def test_config_wizard(tmp_path: Path) -> None:
    dst = tmp_path / "generated.yaml"

    result = runner.invoke(
        app, ["config", "wizard", str(dst)], input="0123456789abc\nimperial\nParis\noff\n"
    )

    assert result.exit_code == 0, result.output
    cfg = UserSettings.load(dst)
    assert cfg.api_key == "0123456789abc"
    assert cfg.units == "imperial"
    assert cfg.default_city == "Paris"
    assert cfg.geolocation == "off"


def test_missing_config_reports_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CITYWEATHER_CONFIG", str(tmp_path / "absent.yaml"))

    result = runner.invoke(app, ["favorites", "list"])

    assert result.exit_code == 2


@pytest.mark.parametrize(
    "args",
    [
        ["show", "   "],
        ["favorites", "open", ""],
        ["favorites", "toggle", " "],
    ],
)
def test_blank_city_is_rejected(config_file: Path, tmp_path: Path, args: list[str]) -> None:
    result = runner.invoke(app, [*args, "--config", str(config_file)])

    assert result.exit_code == 2
    assert not (tmp_path / "favorites.json").exists()


def test_favorites_toggle_strips_name(
    config_file: Path, tmp_path: Path, mock_get: MagicMock
) -> None:
    result = runner.invoke(app, ["favorites", "toggle", "  Paris ", "--config", str(config_file)])
    assert "Added Paris. Favorites: Paris" in result.stdout

    stored = json.loads((tmp_path / "favorites.json").read_text(encoding="utf-8"))
    assert stored == {"favoritesCities": ["Paris"]}

    result = runner.invoke(app, ["show", "Paris", "--config", str(config_file)])
    assert "Paris, MA *" in result.stdout
