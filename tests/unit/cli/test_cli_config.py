"""Unit tests for configuration loading in the latexfmt CLI."""

import argparse
import logging

import pytest

from latexfmt.cli.builder import create_parser
from latexfmt.cli.config import (
    build_options,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    normalize_config,
)
from latexfmt.exceptions import ValidationError
from latexfmt.options import LayoutOptions, TokenPrinterOptions


def parse_args(*argv):
    return create_parser().parse_args(list(argv))


@pytest.mark.unit
@pytest.mark.cli
class TestLoadConfigFile:
    """Test loading each configuration format."""

    def test_toml(self, tmp_path):
        """Test a TOML file."""
        path = tmp_path / ".latexfmt.toml"
        path.write_text('engine = "text"\nmax_width = 72\n', encoding="utf-8")
        assert load_config_file(path) == {"engine": "text", "max_width": 72}

    def test_yaml(self, tmp_path):
        """Test a YAML file."""
        path = tmp_path / ".latexfmt.yaml"
        path.write_text("print_width: 100\nuse_tabs: false\n", encoding="utf-8")
        assert load_config_file(path) == {"print_width": 100, "use_tabs": False}

    def test_empty_yaml(self, tmp_path):
        """Test that an empty YAML file is an empty config."""
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_json(self, tmp_path):
        """Test a JSON file."""
        path = tmp_path / "config.json"
        path.write_text('{"tab_width": 4}', encoding="utf-8")
        assert load_config_file(str(path)) == {"tab_width": 4}

    def test_pyproject_table(self, tmp_path):
        """Test the [tool.latexfmt] table of pyproject.toml."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.latexfmt]\nprint_width = 90\n', encoding="utf-8")
        assert load_config_file(path) == {"print_width": 90}

    def test_pyproject_without_table(self, tmp_path):
        """Test that a pyproject.toml without the table gives an empty config."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert load_config_file(path) == {}

    def test_missing_file(self, tmp_path):
        """Test that a missing file is reported."""
        with pytest.raises(argparse.ArgumentTypeError, match="does not exist"):
            load_config_file(tmp_path / "nope.toml")

    def test_directory(self, tmp_path):
        """Test that a directory is not accepted."""
        with pytest.raises(argparse.ArgumentTypeError, match="not a file"):
            load_config_file(tmp_path)

    def test_unsupported_extension(self, tmp_path):
        """Test that unknown extensions are rejected."""
        path = tmp_path / "config.ini"
        path.write_text("[x]\n", encoding="utf-8")
        with pytest.raises(argparse.ArgumentTypeError, match="Unsupported config file format"):
            load_config_file(path)

    @pytest.mark.parametrize(
        "filename,content",
        [
            ("bad.toml", "engine = \n"),
            ("bad.json", "{not json"),
            ("bad.yaml", "a: [1, 2\n"),
            ("list.json", "[1, 2]"),
            ("list.yaml", "- 1\n- 2\n"),
        ],
    )
    def test_invalid_content(self, tmp_path, filename, content):
        """Test that unparseable or non-mapping content is rejected."""
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")
        with pytest.raises(argparse.ArgumentTypeError):
            load_config_file(path)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test searching for configuration files."""

    def test_found_in_parent(self, tmp_path):
        """Test that a config file in a parent directory is found."""
        config = tmp_path / ".latexfmt.json"
        config.write_text("{}", encoding="utf-8")
        start = tmp_path / "a" / "b"
        start.mkdir(parents=True)
        assert find_config_in_parents(start) == config.resolve()

    def test_dotfile_preferred_over_pyproject(self, tmp_path):
        """Test the search order within one directory."""
        (tmp_path / "pyproject.toml").write_text("[tool.latexfmt]\nprint_width = 1\n", encoding="utf-8")
        config = tmp_path / ".latexfmt.toml"
        config.write_text("", encoding="utf-8")
        assert find_config_in_parents(tmp_path) == config.resolve()

    def test_pyproject_without_table_skipped(self, tmp_path):
        """Test that a pyproject.toml without the table does not stop the search."""
        config = tmp_path / ".latexfmt.toml"
        config.write_text("", encoding="utf-8")
        sub = tmp_path / "sub"
        sub.mkdir()
        (sub / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert find_config_in_parents(sub) == config.resolve()

    def test_priority_explicit_over_env(self, tmp_path):
        """Test that --config wins over the environment variable."""
        explicit = tmp_path / "explicit.json"
        explicit.write_text('{"engine": "text"}', encoding="utf-8")
        env = tmp_path / "env.json"
        env.write_text('{"engine": "layout"}', encoding="utf-8")
        assert load_config_with_priority(str(explicit), str(env)) == {"engine": "text"}
        assert load_config_with_priority(None, str(env)) == {"engine": "layout"}

    def test_priority_discovery(self, tmp_path, monkeypatch):
        """Test that discovery starts in the working directory."""
        (tmp_path / ".latexfmt.yml").write_text("tab_width: 2\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert load_config_with_priority() == {"tab_width": 2}


@pytest.mark.unit
@pytest.mark.cli
class TestBuildOptions:
    """Test merging configuration with command-line flags."""

    def test_normalize_config(self, caplog):
        """Test key normalization and unknown key warnings."""
        with caplog.at_level(logging.WARNING, logger="latexfmt.cli.config"):
            result = normalize_config({"printWidth": 50, "tab-width": 2, "colour": "red"})
        assert result == {"print_width": 50, "tab_width": 2}
        assert "colour" in caplog.text

    def test_defaults(self):
        """Test the options used without configuration."""
        engine, token_options, layout_options = build_options({}, parse_args())
        assert engine == "layout"
        assert token_options == TokenPrinterOptions()
        assert layout_options == LayoutOptions()

    def test_config_values(self):
        """Test that configuration values reach both option classes."""
        config = {"engine": "text", "max_width": 50, "print_width": 70, "useTabs": False}
        engine, token_options, layout_options = build_options(config, parse_args())
        assert engine == "text"
        assert token_options.max_width == 50
        assert layout_options.print_width == 70
        assert layout_options.use_tabs is False

    def test_flags_override_config(self):
        """Test that command-line flags take priority."""
        config = {"engine": "text", "print_width": 70, "tab_width": 4}
        args = parse_args("--engine", "layout", "--print-width", "30", "--tab-width", "2", "--use-spaces")
        engine, token_options, layout_options = build_options(config, args)
        assert engine == "layout"
        assert token_options == TokenPrinterOptions(max_width=30, tab_width=2)
        assert layout_options == LayoutOptions(print_width=30, tab_width=2, use_tabs=False)

    def test_invalid_engine(self):
        """Test that an unknown engine in the config is rejected."""
        with pytest.raises(ValidationError):
            build_options({"engine": "fancy"}, parse_args())

    @pytest.mark.parametrize("config", [{"max_width": 0}, {"print_width": "wide"}, {"use_tabs": "no"}])
    def test_invalid_values(self, config):
        """Test that bad option values raise ValidationError."""
        with pytest.raises(ValidationError):
            build_options(config, parse_args())

    @pytest.mark.parametrize("flag", ["0", "-3", "x"])
    def test_width_flag_must_be_positive(self, flag):
        """Test the positive integer flag type."""
        with pytest.raises(SystemExit):
            parse_args("--print-width", flag)
