"""Tests for argument parsing, run configuration and the CLI entry point."""

import io
import json
from types import SimpleNamespace

import pytest

from args import parse_args
from cli_config import RunConfig, build_run_config, load_config
from constants import Constants, ExitCodes
from depselect import build_port, main
from selection.errors import ConfigError
from selection.prompts import ConsolePort, NonInteractivePort, ScriptedPort


class TestParseArgs:
    """Tests for parse_args."""

    def test_defaults(self):
        ns = parse_args([])
        assert ns.DIRECTORY == "."
        assert ns.MANIFEST is None
        assert ns.NO_INTERACTION is False
        assert ns.ANSWERS is None
        assert ns.DRY_RUN is False
        assert ns.LOG_LEVEL is None

    def test_options(self):
        ns = parse_args([
            "-d", "/srv/app", "-m", "app.json", "-k", "skeleton",
            "--installer", "php composer.phar", "--wiring-command", "wire {name}",
            "--answers", "n,y", "--loglevel", "debug", "--dry-run",
        ])
        assert ns.DIRECTORY == "/srv/app"
        assert ns.MANIFEST == "app.json"
        assert ns.TOOL_KEY == "skeleton"
        assert ns.INSTALLER == "php composer.phar"
        assert ns.WIRING_COMMAND == "wire {name}"
        assert ns.ANSWERS == "n,y"
        assert ns.LOG_LEVEL == "DEBUG"
        assert ns.DRY_RUN is True

    def test_answers_and_no_interaction_are_exclusive(self):
        with pytest.raises(SystemExit):
            parse_args(["-n", "--answers", "y"])


class TestRunConfig:
    """Tests for config layering."""

    def test_defaults(self):
        config = build_run_config(parse_args([]), environ={})
        assert config.manifest == Constants.MANIFEST_FILE
        assert config.tool_key == Constants.TOOL_KEY
        assert config.installer_command == Constants.INSTALLER_COMMAND
        assert config.wiring_command is None

    def test_precedence(self, tmp_path):
        cfg = tmp_path / "depselect.yml"
        cfg.write_text(
            "depselect:\n"
            "  tool_key: skeleton\n"
            "  installer: composer-from-file\n"
            "  wiring_command: wire-from-file {name}\n",
            encoding="utf-8",
        )
        args = parse_args(["-c", str(cfg), "--wiring-command", "wire-from-cli {name}"])
        config = build_run_config(args, environ={Constants.ENV_INSTALLER: "composer-from-env"})
        assert config.tool_key == "skeleton"
        assert config.installer_command == "composer-from-env"
        assert config.wiring_command == "wire-from-cli {name}"

    def test_json_config_without_section(self, tmp_path):
        cfg = tmp_path / "depselect.json"
        cfg.write_text(json.dumps({"manifest": "app.json"}), encoding="utf-8")
        assert load_config(str(cfg)) == {"manifest": "app.json"}

    def test_missing_config_is_ignored(self, tmp_path):
        assert load_config(str(tmp_path / "nope.yml")) == {}

    def test_invalid_config_raises(self, tmp_path):
        cfg = tmp_path / "bad.yml"
        cfg.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(cfg))

    def test_vendor_dir_resolution(self, tmp_path):
        config = RunConfig(directory=str(tmp_path))
        assert config.manifest_path == str(tmp_path / "composer.json")
        assert config.resolve_vendor_dir({}) == str(tmp_path / "vendor")
        assert config.resolve_vendor_dir({"config": {"vendor-dir": "lib"}}) == str(tmp_path / "lib")
        config.vendor_dir = "/opt/vendor"
        assert config.resolve_vendor_dir({"config": {"vendor-dir": "lib"}}) == "/opt/vendor"


class TestBuildPort:
    """Tests for prompt channel selection."""

    def test_scripted(self):
        port = build_port(SimpleNamespace(ANSWERS="n, y,", NO_INTERACTION=False))
        assert isinstance(port, ScriptedPort)
        assert port.remaining == 3

    def test_no_interaction(self):
        port = build_port(SimpleNamespace(ANSWERS=None, NO_INTERACTION=True))
        assert isinstance(port, NonInteractivePort)

    def test_non_tty_stdin(self):
        port = build_port(SimpleNamespace(ANSWERS=None, NO_INTERACTION=False), stdin=io.StringIO())
        assert isinstance(port, NonInteractivePort)

    def test_tty_stdin(self):
        class Tty(io.StringIO):
            def isatty(self):
                return True

        port = build_port(SimpleNamespace(ANSWERS=None, NO_INTERACTION=False), stdin=Tty())
        assert isinstance(port, ConsolePort)


def _project(tmp_path):
    manifest = {
        "name": "acme/skeleton",
        "require": {"php": "^8.1"},
        "extra": {"depselect": [{"name": "x/a", "constraint": "^1.0"}]},
    }
    path = tmp_path / "composer.json"
    path.write_text(json.dumps(manifest, indent=4) + "\n", encoding="utf-8")
    return path


class TestMain:
    """Tests for the main entry point."""

    def test_minimal_install(self, tmp_path):
        path = _project(tmp_path)
        with pytest.raises(SystemExit) as exc_info:
            main(["-d", str(tmp_path), "--answers", "y"])
        assert exc_info.value.code == ExitCodes.SUCCESS.value
        assert "extra" not in json.loads(path.read_text(encoding="utf-8"))

    def test_non_interactive_is_minimal(self, tmp_path):
        path = _project(tmp_path)
        with pytest.raises(SystemExit) as exc_info:
            main(["-d", str(tmp_path), "-n"])
        assert exc_info.value.code == ExitCodes.SUCCESS.value
        assert "extra" not in json.loads(path.read_text(encoding="utf-8"))

    def test_missing_manifest(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["-d", str(tmp_path), "-n"])
        assert exc_info.value.code == ExitCodes.FILE_ERROR.value

    def test_installer_failure(self, tmp_path):
        path = _project(tmp_path)
        original = path.read_text(encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["-d", str(tmp_path), "--answers", "n,y",
                  "--installer", "depselect-test-missing-installer"])
        assert exc_info.value.code == ExitCodes.INSTALL_ERROR.value
        assert path.read_text(encoding="utf-8") == original

    def test_exhausted_answers(self, tmp_path):
        _project(tmp_path)
        with pytest.raises(SystemExit) as exc_info:
            main(["-d", str(tmp_path), "--answers", "n"])
        assert exc_info.value.code == ExitCodes.INPUT_ERROR.value
