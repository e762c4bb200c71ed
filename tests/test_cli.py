"""Tests for the command-line interface."""

import json
import logging

import pytest

from envconfig_kit.cli import main


SCHEMA_TOML = """\
[variables.ENVKIT_TEST_PORT]
type = "port"
default = 3000

[variables.ENVKIT_TEST_URL]
type = "url"

[variables.ENVKIT_TEST_TOKEN]
type = "regex"
pattern = 'tok-[0-9]+'
secret = true

[variables.ENVKIT_TEST_DEBUG]
type = "boolean"
optional = true
"""


@pytest.fixture
def project(tmp_path, monkeypatch):
    """A working directory with a schema file and a clean environment."""
    monkeypatch.chdir(tmp_path)
    for name in ("ENVKIT_TEST_PORT", "ENVKIT_TEST_URL", "ENVKIT_TEST_TOKEN", "ENVKIT_TEST_DEBUG", "APP_ENV"):
        monkeypatch.delenv(name, raising=False)
    (tmp_path / "envconfig.toml").write_text(SCHEMA_TOML, encoding="utf-8")
    return tmp_path


class TestHelp:

    @pytest.mark.parametrize("argv", [[], ["help"]])
    def test_shows_help(self, argv, capsys):
        assert main(argv) == 0
        output = capsys.readouterr().out
        assert "envconfig-kit" in output
        for command in ("generate", "check", "doctor", "init"):
            assert command in output

    def test_dash_h(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-h"])
        assert exc_info.value.code == 0
        assert "envconfig-kit" in capsys.readouterr().out

    def test_unknown_command(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["frobnicate"])
        assert exc_info.value.code == 2


class TestGenerate:

    def test_writes_env_example(self, project, capsys):
        assert main(["generate"]) == 0

        content = (project / ".env.example").read_text(encoding="utf-8")
        assert content.startswith("# Required\n")
        assert "ENVKIT_TEST_PORT=3000" in content
        assert "ENVKIT_TEST_URL=" in content
        assert "# Optional\nENVKIT_TEST_DEBUG=" in content
        assert "Generated" in capsys.readouterr().out

    def test_markdown_to_stdout(self, project, capsys):
        assert main(["generate", "--format", "markdown"]) == 0
        output = capsys.readouterr().out
        assert "| `ENVKIT_TEST_PORT` | `port` | Yes | `3000` |" in output
        assert not (project / ".env.example").exists()

    def test_json_to_file(self, project):
        target = project / "schema.json"
        assert main(["generate", "--format", "json", "--output", str(target)]) == 0
        records = json.loads(target.read_text(encoding="utf-8"))
        assert records[0] == {"name": "ENVKIT_TEST_PORT", "type": "port", "required": True, "default": 3000}

    def test_missing_schema(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        assert main(["generate"]) == 1
        assert "Schema file not found" in capsys.readouterr().err


class TestCheck:

    def test_missing_env_file(self, project, capsys):
        assert main(["check"]) == 1
        assert "Missing .env file" in capsys.readouterr().out

    def test_valid_environment(self, project, capsys):
        (project / ".env").write_text(
            "ENVKIT_TEST_URL=https://example.com\nENVKIT_TEST_TOKEN=tok-123\n",
            encoding="utf-8",
        )
        assert main(["check"]) == 0
        assert "validated" in capsys.readouterr().out

    def test_reports_all_errors_masked(self, project, capsys):
        (project / ".env").write_text(
            "ENVKIT_TEST_URL=nope\nENVKIT_TEST_TOKEN=top-secret-value\n",
            encoding="utf-8",
        )
        assert main(["check"]) == 1

        err = capsys.readouterr().err
        assert "ENVKIT_TEST_URL" in err
        assert "ENVKIT_TEST_TOKEN" in err
        assert "top-secret-value" not in err

    def test_no_mask(self, project, capsys):
        (project / ".env").write_text(
            "ENVKIT_TEST_URL=https://example.com\nENVKIT_TEST_TOKEN=top-secret-value\n",
            encoding="utf-8",
        )
        assert main(["check", "--no-mask"]) == 1
        assert "top-secret-value" in capsys.readouterr().err

    def test_environment_specific_file(self, project, monkeypatch):
        (project / ".env").write_text("ENVKIT_TEST_URL=bad\n", encoding="utf-8")
        (project / ".env.ci").write_text(
            "ENVKIT_TEST_URL=https://ci.example.com\nENVKIT_TEST_TOKEN=tok-456\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("APP_ENV", "ci")
        assert main(["check"]) == 0


class TestDoctor:

    def test_reports_missing_files(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        assert main(["doctor"]) == 1
        output = capsys.readouterr().out
        assert "✗ .env file" in output
        assert "✗ envconfig.toml schema" in output

    def test_all_present(self, project, capsys):
        (project / ".env").write_text("", encoding="utf-8")
        (project / ".env.example").write_text("", encoding="utf-8")
        assert main(["doctor"]) == 0
        assert "Everything looks good" in capsys.readouterr().out


class TestInit:

    def test_creates_files(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        assert main(["init"]) == 0

        assert (tmp_path / "envconfig.toml").exists()
        assert (tmp_path / ".env.example").exists()
        assert "Created envconfig.toml" in capsys.readouterr().out

    def test_does_not_overwrite(self, project, capsys):
        assert main(["init"]) == 0
        assert "envconfig.toml already exists" in capsys.readouterr().out
        assert "ENVKIT_TEST_PORT" in (project / "envconfig.toml").read_text(encoding="utf-8")

    def test_generated_schema_is_usable(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        main(["init"])
        capsys.readouterr()

        assert main(["generate", "--format", "markdown"]) == 0
        output = capsys.readouterr().out
        assert "`DATABASE_URL`" in output
        assert "`development`" in output


class TestLoggingOptions:

    def test_settings_follow_schema_path(self, tmp_path, monkeypatch, capsys):
        """Logging settings come from the file passed with --schema."""
        monkeypatch.chdir(tmp_path)
        schema_path = tmp_path / "config" / "custom.toml"
        schema_path.parent.mkdir()
        schema_path.write_text('[logging]\nlevel = "DEBUG"\n\n' + SCHEMA_TOML, encoding="utf-8")

        assert main(["generate", "--schema", str(schema_path), "--format", "json"]) == 0
        assert logging.getLogger().level == logging.DEBUG

    def test_invalid_log_level(self, project, capsys):
        assert main(["--log-level", "LOUD", "doctor"]) == 1
        assert "Invalid logging option" in capsys.readouterr().err
