"""Tests for dotenv parsing and layered sources."""

import pytest

from envconfig_kit.sources import EnvSourceLoader, load_dotenv, parse_dotenv


class TestParseDotenv:
    """Tests for dotenv text parsing."""

    def test_simple_pairs(self):
        assert parse_dotenv("KEY1=value1\nKEY2=value2") == {"KEY1": "value1", "KEY2": "value2"}

    def test_quoted_values(self):
        content = "KEY1=\"quoted value\"\nKEY2='single quoted'"
        assert parse_dotenv(content) == {"KEY1": "quoted value", "KEY2": "single quoted"}

    def test_comments_ignored(self):
        content = "# This is a comment\nKEY=value\n# Another comment"
        assert parse_dotenv(content) == {"KEY": "value"}

    def test_blank_lines_ignored(self):
        assert parse_dotenv("KEY1=value1\n\n\nKEY2=value2\n\n") == {"KEY1": "value1", "KEY2": "value2"}

    def test_values_with_equals_signs(self):
        content = "URL=https://example.com?foo=bar&baz=qux"
        assert parse_dotenv(content) == {"URL": "https://example.com?foo=bar&baz=qux"}

    def test_trims_whitespace(self):
        assert parse_dotenv("  KEY1  =  value1  \n  KEY2=value2") == {"KEY1": "value1", "KEY2": "value2"}

    def test_empty_values(self):
        assert parse_dotenv("KEY1=\nKEY2=value") == {"KEY1": "", "KEY2": "value"}

    def test_no_interpolation(self):
        assert parse_dotenv("A=1\nB=${A}") == {"A": "1", "B": "${A}"}

    def test_export_prefix(self):
        assert parse_dotenv("export TOKEN=abc") == {"TOKEN": "abc"}


class TestLoadDotenv:
    """Tests for reading dotenv files."""

    def test_reads_file(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text("A=1\nB='two'\n", encoding="utf-8")
        assert load_dotenv(path) == {"A": "1", "B": "two"}

    def test_missing_file_returns_empty(self, tmp_path):
        assert load_dotenv(tmp_path / "nope.env") == {}

    def test_directory_returns_empty(self, tmp_path):
        assert load_dotenv(tmp_path) == {}

    def test_accepts_string_path(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text("A=1\n", encoding="utf-8")
        assert load_dotenv(str(path)) == {"A": "1"}


class TestEnvSourceLoader:
    """Tests for source precedence."""

    @pytest.fixture
    def project(self, tmp_path):
        (tmp_path / ".env").write_text("A=base\nB=base\nC=base\nD=base\n")
        (tmp_path / ".env.production").write_text("B=production\nC=production\n")
        (tmp_path / ".env.local").write_text("C=local\n")
        return tmp_path

    def test_source_paths_with_environment(self, project):
        loader = EnvSourceLoader(base_dir=project, environment="production")
        assert [p.name for p in loader.source_paths()] == [".env", ".env.production", ".env.local"]

    def test_source_paths_without_environment(self, project):
        loader = EnvSourceLoader(base_dir=project)
        assert [p.name for p in loader.source_paths()] == [".env", ".env.local"]

    def test_precedence(self, project):
        loader = EnvSourceLoader(base_dir=project, environment="production")
        merged = loader.load({"D": "process"})

        assert merged == {"A": "base", "B": "production", "C": "local", "D": "process"}

    def test_environment_file_skipped_when_unset(self, project):
        merged = EnvSourceLoader(base_dir=project).load({})
        assert merged["B"] == "base"
        assert merged["C"] == "local"

    def test_defaults_to_cwd_and_os_environ(self, project, monkeypatch):
        monkeypatch.chdir(project)
        monkeypatch.setenv("A", "from-os")

        merged = EnvSourceLoader().load()

        assert merged["A"] == "from-os"
        assert merged["D"] == "base"

    def test_rebuilt_on_every_call(self, project):
        loader = EnvSourceLoader(base_dir=project)
        first = loader.load({})
        (project / ".env.local").write_text("C=changed\n")
        assert loader.load({})["C"] == "changed"
        assert first["C"] == "local"
