from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from cloudauth import __version__
from cloudauth.cli import cli


def _settings(**overrides):
    settings = MagicMock()
    settings.database_url = "sqlite+aiosqlite:///./data/cloudauth.db"
    settings.host = "0.0.0.0"
    settings.port = 8000
    settings.workers = 1
    settings.log_level = "INFO"
    settings.log_format = "console"
    settings.environment = "development"
    settings.is_production = False
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_info():
    result = CliRunner().invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "CloudAuth" in result.output
    assert "Refresh Exp" in result.output


def test_serve_invalid_workers_sqlite():
    """--workers > 1 is refused on SQLite before uvicorn starts."""
    with patch("cloudauth.cli.get_settings", return_value=_settings()), \
         patch("uvicorn.run") as mock_run:
        result = CliRunner().invoke(cli, ["serve", "--workers", "2"])

    assert result.exit_code == 1
    assert "SQLite does not support multiple worker processes" in result.output
    mock_run.assert_not_called()


def test_serve_passes_overrides_to_uvicorn():
    with patch("cloudauth.cli.get_settings", return_value=_settings()), \
         patch("cloudauth.cli.configure_logging"), \
         patch("uvicorn.run") as mock_run:
        result = CliRunner().invoke(cli, ["serve", "--host", "127.0.0.1", "--port", "9001"])

    assert result.exit_code == 0
    mock_run.assert_called_once()
    assert mock_run.call_args.args[0] == "cloudauth.infrastructure.api.app:app"
    assert mock_run.call_args.kwargs["host"] == "127.0.0.1"
    assert mock_run.call_args.kwargs["port"] == 9001


def test_init_db_refuses_production_without_force():
    with patch("cloudauth.cli.get_settings", return_value=_settings(is_production=True)), \
         patch("cloudauth.cli.configure_logging"):
        result = CliRunner().invoke(cli, ["init-db"])

    assert result.exit_code == 1
    assert "Use migrations" in result.output


def test_add_tags_requires_names():
    result = CliRunner().invoke(cli, ["add-tags"])

    assert result.exit_code != 0
