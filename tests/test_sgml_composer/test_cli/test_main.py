"""Tests for the CLI main module."""

import json
import logging
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from sgml_composer.cli.main import (
    CLIConfig,
    DocumentRenderer,
    create_argument_parser,
    main,
)
from sgml_composer.shared.config import ComposerConfig, ConfigValidationError

OUTER = {
    "tag": "outer",
    "attributes": {"size": "7", "loop": "forever"},
    "children": [{"tag": "inner", "content": "Hello world!"}],
}


@pytest.fixture
def description_file():
    """Write the outer/inner description to a temporary file."""
    with tempfile.TemporaryDirectory() as temp_dir:
        path = Path(temp_dir) / "outer.json"
        path.write_text(json.dumps(OUTER))
        yield path


class TestCLIConfig:
    """Test CLI configuration management."""

    def test_default_config(self):
        """Test default configuration values."""
        config = CLIConfig()

        assert config.composer_config == ComposerConfig()
        assert config.minimize is None
        assert config.verbose is False
        assert config.quiet is False

    def test_config_from_file(self):
        """Test loading configuration from file."""
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.json"
            config_path.write_text(json.dumps({"render": {"indent_unit": "    "}}))

            config = CLIConfig.from_file(config_path)

        assert config.composer_config.render.indent_unit == "    "

    def test_config_from_nonexistent_file(self):
        """Test a missing config file is reported."""
        with pytest.raises(ConfigValidationError, match="Could not read config file"):
            CLIConfig.from_file(Path("nonexistent.json"))


class TestDocumentRenderer:
    """Test description rendering."""

    def test_render_file_success(self, description_file):
        """Test a valid description renders."""
        renderer = DocumentRenderer(CLIConfig())

        result = renderer.render_file(description_file)

        assert result["success"] is True
        assert result["file"] == str(description_file)
        assert result["markup"] == (
            '<outer size="7" loop="forever"><inner>Hello world!</inner></outer>'
        )

    def test_render_file_invalid_json(self):
        """Test malformed JSON is reported, not raised."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "bad.json"
            path.write_text("{")

            result = DocumentRenderer(CLIConfig()).render_file(path)

        assert result["success"] is False
        assert "error" in result

    def test_render_file_invalid_description(self):
        """Test malformed descriptions are reported, not raised."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "bad.json"
            path.write_text(json.dumps({"tag": "p", "colour": "red"}))

            result = DocumentRenderer(CLIConfig()).render_file(path)

        assert result["success"] is False
        assert "unknown keys" in result["error"]

    def test_render_file_tags_records_with_correlation_id(self, description_file, caplog):
        """Test each rendered file logs under its own correlation ID."""
        renderer = DocumentRenderer(CLIConfig())

        with caplog.at_level(logging.INFO, logger="sgml_composer.cli.main"):
            renderer.render_files([description_file, description_file])

        ids = [record.correlation_id for record in caplog.records]
        assert len(ids) == 2
        assert all(ids)
        assert ids[0] != ids[1]

    def test_render_file_without_correlation_tracking(self, description_file, caplog):
        """Test disabled tracking leaves the correlation ID unset."""
        config = CLIConfig()
        config.composer_config = ComposerConfig.from_dict(
            {"global_": {"enable_correlation_tracking": False}}
        )

        with caplog.at_level(logging.INFO, logger="sgml_composer.cli.main"):
            DocumentRenderer(config).render_file(description_file)

        assert caplog.records[-1].correlation_id is None

    def test_render_missing_file(self):
        """Test a missing input is reported."""
        result = DocumentRenderer(CLIConfig()).render_file(Path("nonexistent.json"))

        assert result["success"] is False


class TestArgumentParser:
    """Test command-line argument parsing."""

    def test_create_parser(self):
        """Test parser creation."""
        assert create_argument_parser().prog == "sgml-compose"

    def test_render_command_defaults(self):
        """Test basic render command parsing."""
        args = create_argument_parser().parse_args(["render", "page.json"])

        assert args.command == "render"
        assert args.paths == [Path("page.json")]
        assert args.minimize is None
        assert args.output is None

    def test_minimize_and_pretty_flags(self):
        """Test the output mode flags."""
        parser = create_argument_parser()

        assert parser.parse_args(["render", "a.json", "-m"]).minimize is True
        assert parser.parse_args(["render", "a.json", "--pretty"]).minimize is False

    def test_minimize_and_pretty_are_exclusive(self):
        """Test both mode flags together are rejected."""
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(["render", "a.json", "-m", "-p"])

    def test_config_and_preset_are_exclusive(self):
        """Test a config file and a preset cannot be combined."""
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(
                ["render", "a.json", "-c", "config.json", "--preset", "html"]
            )


class TestMain:
    """Test the CLI entry point."""

    def test_no_command_prints_help(self, capsys):
        """Test running without a command."""
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_render_pretty_to_stdout(self, description_file, capsys):
        """Test rendering indented markup to stdout."""
        assert main(["render", str(description_file), "--pretty"]) == 0

        assert capsys.readouterr().out == (
            '<outer size="7" loop="forever">\n'
            "  <inner>Hello world!</inner>\n"
            "</outer>\n"
        )

    def test_render_with_preset(self, description_file, capsys):
        """Test the pretty preset changes the default mode."""
        assert main(["render", str(description_file), "--preset", "pretty"]) == 0

        assert capsys.readouterr().out.endswith("</outer>\n")

    def test_render_to_output_file(self, description_file):
        """Test writing markup to a file."""
        output = description_file.parent / "out.html"

        assert main(["render", str(description_file), "-m", "-o", str(output)]) == 0

        assert output.read_text() == (
            '<outer size="7" loop="forever"><inner>Hello world!</inner></outer>'
        )

    def test_render_reports_failures(self, description_file, capsys):
        """Test a failing input yields exit code 1 but renders the rest."""
        missing = description_file.parent / "missing.json"

        assert main(["render", str(description_file), str(missing), "-m"]) == 1

        captured = capsys.readouterr()
        assert captured.out.startswith("<outer")
        assert "Error:" in captured.err

    def test_render_with_invalid_config(self, description_file, capsys):
        """Test an invalid configuration file aborts rendering."""
        config_path = description_file.parent / "config.json"
        config_path.write_text(json.dumps({"render": {"line_break": "|"}}))

        assert main(["render", str(description_file), "-c", str(config_path)]) == 1
        assert "Configuration error" in capsys.readouterr().err

    def test_render_applies_configured_logging_level(self, description_file):
        """Test the config file's logging level configures CLI logging."""
        config_path = description_file.parent / "config.json"
        config_path.write_text(json.dumps({"global_": {"logging_level": "DEBUG"}}))

        with patch("sgml_composer.cli.main.configure_logging") as configure:
            assert main(["render", str(description_file), "-c", str(config_path)]) == 0

        configure.assert_called_once_with("DEBUG")

    def test_verbose_flag_overrides_configured_level(self, description_file):
        """Test --verbose takes precedence over the configured level."""
        config_path = description_file.parent / "config.json"
        config_path.write_text(json.dumps({"global_": {"logging_level": "ERROR"}}))

        with patch("sgml_composer.cli.main.configure_logging") as configure:
            assert main(["-v", "render", str(description_file), "-c", str(config_path)]) == 0

        configure.assert_called_once_with("DEBUG")

    def test_keyboard_interrupt(self, description_file):
        """Test interruption returns the SIGINT exit code."""
        with patch("sgml_composer.cli.main.cmd_render", side_effect=KeyboardInterrupt):
            assert main(["render", str(description_file)]) == 130
