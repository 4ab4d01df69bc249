from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from ledgerly.cli import cli


def _settings(**overrides):
    settings = MagicMock()
    settings.database_url = "sqlite+aiosqlite:///./data/ledgerly.db"
    settings.host = "0.0.0.0"
    settings.port = 8000
    settings.workers = 1
    settings.log_level = "INFO"
    settings.environment = "development"
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


def test_serve_rejects_sqlite_workers():
    """--workers > 1 is refused for SQLite before the server starts."""
    runner = CliRunner()

    with patch("ledgerly.cli.get_settings", return_value=_settings()), patch("uvicorn.run") as mock_run:
        result = runner.invoke(cli, ["serve", "--workers", "2"])

    assert result.exit_code == 1
    assert "SQLite does not support multiple worker processes" in result.output
    mock_run.assert_not_called()


def test_serve_passes_overrides_to_uvicorn():
    runner = CliRunner()

    with patch("ledgerly.cli.get_settings", return_value=_settings()), \
         patch("ledgerly.cli.configure_logging"), \
         patch("uvicorn.run") as mock_run:
        result = runner.invoke(cli, ["serve", "--port", "9001"])

    assert result.exit_code == 0
    mock_run.assert_called_once()
    assert mock_run.call_args.kwargs["port"] == 9001
    assert mock_run.call_args.kwargs["workers"] == 1


def test_create_admin_rejects_bad_email():
    runner = CliRunner()

    with patch("ledgerly.cli.configure_logging"):
        result = runner.invoke(cli, ["create-admin", "--email", "not-an-email", "--password", "x"])

    assert result.exit_code == 1
    assert "Invalid email format" in result.output


def test_info_shows_tax_rate():
    runner = CliRunner()

    result = runner.invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "Tax Rate:     14.00%" in result.output
