"""
Tests for vercollate.cli module.

Runs main() with explicit argv and checks exit codes and output for every
command.
"""

from __future__ import annotations

import io

import pytest

from vercollate.cli import main


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every CLI test from an empty directory so no config is discovered."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def run_cli(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


class TestCompareCommand:
    """Tests for 'vercollate compare'."""

    def test_relation_holds(self, capsys):
        """Test exit code 0 and 'true' when the relation holds."""
        assert run_cli(["compare", "1.0", "<", "2.0"]) == 0
        assert capsys.readouterr().out.strip() == "true"

    def test_relation_fails(self, capsys):
        """Test exit code 1 and 'false' when it does not."""
        assert run_cli(["compare", "1.0", ">", "2.0"]) == 1
        assert capsys.readouterr().out.strip() == "false"

    def test_preset(self, capsys):
        """Test selecting a preset."""
        assert run_cli(["compare", "1.0~rc1", "<", "1.0", "--preset", "RHEL"]) == 0

    def test_option_flags(self):
        """Test building an ad-hoc policy from switch flags."""
        assert run_cli(["compare", "2:1.0", ">", "9.9"]) == 1
        assert run_cli(["compare", "2:1.0", ">", "9.9", "--epoch"]) == 0

    def test_preset_and_flags_conflict(self, capsys):
        """Test that --preset and switch flags cannot be combined."""
        code = run_cli(["compare", "1.0", "<", "2.0", "--preset", "rhel", "--epoch"])
        assert code == 2
        assert "Error:" in capsys.readouterr().err

    def test_unknown_operator(self, capsys):
        """Test exit code 2 for an unknown operator."""
        assert run_cli(["compare", "1.0", "??", "2.0"]) == 2
        assert "Unknown compare operator" in capsys.readouterr().err

    def test_unknown_preset(self, capsys):
        """Test exit code 2 for an unknown preset."""
        assert run_cli(["compare", "1.0", "<", "2.0", "--preset", "gentoo"]) == 2
        assert "Unknown preset" in capsys.readouterr().err

    def test_discovered_config(self, isolated_cwd):
        """Test that vercollate.yaml in the working directory is used."""
        (isolated_cwd / "vercollate.yaml").write_text("default_preset: rhel\n")

        assert run_cli(["compare", "1.0~rc1", "<", "1.0"]) == 0


class TestSortCommand:
    """Tests for 'vercollate sort'."""

    def test_sort_arguments(self, capsys):
        """Test sorting versions given on the command line."""
        assert run_cli(["sort", "1.0-1", "1:0.9", "1.0~rc1-1", "--preset", "dpkg"]) == 0
        assert capsys.readouterr().out.split() == ["1.0~rc1-1", "1.0-1", "1:0.9"]

    def test_sort_stdin(self, capsys, monkeypatch):
        """Test reading versions from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO("1.10\n\n1.9\n1.2\n"))

        assert run_cli(["sort", "--reverse"]) == 0
        assert capsys.readouterr().out.split() == ["1.10", "1.9", "1.2"]

    def test_verbose_goes_to_stderr(self, capsys):
        """Test that verbose messages do not pollute stdout."""
        assert run_cli(["sort", "2.0", "1.0", "--verbose"]) == 0
        captured = capsys.readouterr()
        assert captured.out.split() == ["1.0", "2.0"]
        assert "[SORT]" in captured.err


class TestQueryCommand:
    """Tests for 'vercollate query'."""

    def test_query(self, capsys):
        """Test printing a single value."""
        assert run_cli(["query", "SELECT version_compare('1.0', '>=', '1.0')"]) == 0
        assert capsys.readouterr().out.strip() == "1"

    def test_query_header(self, capsys):
        """Test printing column names."""
        sql = "SELECT '1.0' AS a, NULL AS b"
        assert run_cli(["query", sql, "--header"]) == 0
        assert capsys.readouterr().out.splitlines() == ["a\tb", "1.0\t"]

    def test_query_error(self, capsys):
        """Test exit code 2 on an SQL error."""
        assert run_cli(["query", "SELECT version_compare('1.0')"]) == 2
        assert "Error:" in capsys.readouterr().err


class TestValidateCommand:
    """Tests for 'vercollate validate'."""

    def test_valid(self, create_yaml_file, sample_config_data, capsys):
        """Test a valid config."""
        path = create_yaml_file("vercollate.yaml", sample_config_data)

        assert run_cli(["validate", str(path)]) == 0
        assert "[SUCCESS]" in capsys.readouterr().out

    def test_invalid(self, isolated_cwd, capsys):
        """Test an invalid config."""
        path = isolated_cwd / "bad.yaml"
        path.write_text("presets:\n  rhel:\n    epoch: true\n")

        assert run_cli(["validate", str(path)]) == 1
        out = capsys.readouterr().out
        assert "[FAILED]" in out
        assert "built-in" in out


class TestPresetsCommand:
    """Tests for 'vercollate presets'."""

    def test_lists_builtins(self, capsys):
        """Test that built-in presets and their collations are listed."""
        assert run_cli(["presets"]) == 0
        out = capsys.readouterr().out
        assert "version_rhel" in out
        assert "* generic" in out

    def test_lists_configured(self, create_yaml_file, sample_config_data, capsys):
        """Test that configured presets are listed and the default marked."""
        path = create_yaml_file("c.yaml", sample_config_data)

        assert run_cli(["presets", "--config", str(path)]) == 0
        out = capsys.readouterr().out
        assert "version_alpine" in out
        assert "* rhel" in out
