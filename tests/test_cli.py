"""Tests for the command line interface and connection settings."""

import json

import pytest
from pydantic import ValidationError as SettingsError

from surreal_transfer import cli
from surreal_transfer.models.settings import ENV_VARS, ConnectionSettings
from surreal_transfer.models.transfer import FileFormat
from surreal_transfer.services.database import SurrealConnection


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for env_var in ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)


@pytest.fixture
def connected(monkeypatch, fake_connection_cls):
    """Route SurrealConnection.connect to an in-memory connection."""
    connection = fake_connection_cls(tables={"person": [{"id": "person:1", "name": "Al"}]})
    seen = []

    def connect(settings):
        seen.append(settings)
        return connection

    monkeypatch.setattr(SurrealConnection, "connect", staticmethod(connect))
    connection.seen_settings = seen
    return connection


class TestParser:

    def test_export_defaults(self):
        args = cli.build_parser().parse_args(["export", "person"])
        config = cli.config_from_args(args)

        assert config.operation == "export"
        assert config.items == ["person"]
        assert config.format == FileFormat.JSON
        assert config.output_dir == "."
        assert config.page_size == 1000
        assert config.max_workers is None

    def test_import_options(self):
        args = cli.build_parser().parse_args(["import", "a.json", "b.json", "--dry-run", "--report", "r.json"])
        config = cli.config_from_args(args)

        assert config.operation == "import"
        assert config.items == ["a.json", "b.json"]
        assert config.dry_run
        assert config.report_path == "r.json"

    def test_unknown_format_rejected(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["export", "person", "--format", "xml"])

    def test_connection_flags(self):
        args = cli.build_parser().parse_args([
            "export", "person", "-e", "db:8000", "-u", "admin", "-p", "secret", "--ns", "shop", "--db", "main",
        ])
        settings = cli.settings_from_args(args)

        assert settings.endpoint == "http://db:8000"
        assert settings.username == "admin"
        assert settings.password == "secret"
        assert settings.namespace == "shop"
        assert settings.database == "main"


class TestMain:

    def test_no_command(self, capsys):
        assert cli.main([]) == cli.EXIT_FATAL

    def test_export_ok(self, connected, tmp_path, capsys):
        code = cli.main(["export", "person", "-o", str(tmp_path), "--ns", "shop"])

        assert code == cli.EXIT_OK
        assert json.loads((tmp_path / "person.json").read_text()) == [{"id": "1", "name": "Al"}]
        assert connected.seen_settings[0].namespace == "shop"
        assert "Succeeded: 1" in capsys.readouterr().out

    def test_export_csv(self, connected, tmp_path):
        connected.schemas["person"] = ["id", "name"]
        code = cli.main(["export", "person", "--format", "csv", "-o", str(tmp_path)])

        assert code == cli.EXIT_OK
        assert (tmp_path / "person.csv").read_text().splitlines() == ["id,name", "1,Al"]

    def test_partial_failure(self, connected, tmp_path, write_json):
        code = cli.main(["import", str(write_json("a.json", [{"id": 1}])), str(write_json("b.json", "{"))])
        assert code == cli.EXIT_PARTIAL

    def test_invalid_input_is_fatal(self, connected, tmp_path):
        code = cli.main(["import", str(tmp_path / "nope.json")])
        assert code == cli.EXIT_FATAL
        assert connected.seen_settings == []

    def test_invalid_settings(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SURREAL_ENDPOINT", "   ")
        assert cli.main(["export", "person", "-o", str(tmp_path)]) == cli.EXIT_FATAL

    def test_unwritable_report(self, connected, tmp_path, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        code = cli.main(["export", "person", "-o", str(tmp_path), "--report", str(blocker / "run.json")])

        assert code == cli.EXIT_FATAL
        assert (tmp_path / "person.json").is_file()
        assert "Failed to write report" in capsys.readouterr().out

    def test_summary_lists_failures(self, connected, tmp_path, write_json, capsys):
        cli.main(["import", str(write_json("b.json", "{"))])
        out = capsys.readouterr().out
        assert "FAIL" in out
        assert "b.json" in out


class TestConnectionSettings:

    def test_defaults(self):
        settings = ConnectionSettings.from_env()
        assert settings.endpoint == "http://localhost:8000"
        assert (settings.username, settings.password) == ("root", "root")
        assert (settings.namespace, settings.database) == ("test", "test")

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("SURREAL_NS", "shop")
        monkeypatch.setenv("SURREAL_ENDPOINT", "https://db.example.com/")
        settings = ConnectionSettings.from_env()

        assert settings.namespace == "shop"
        assert settings.endpoint == "https://db.example.com"

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("SURREAL_DB", "env")
        settings = ConnectionSettings.from_env({"database": "flag", "namespace": None})

        assert settings.database == "flag"
        assert settings.namespace == "test"

    def test_password_not_reported(self):
        assert "password" not in ConnectionSettings(password="secret").to_dict()

    def test_invalid_timeout(self):
        with pytest.raises(SettingsError):
            ConnectionSettings(timeout=0)
