"""Tests for manifest patching and the on-disk manifest file."""

import json
import os

import pytest

from manifest.file import ManifestFile, detect_indent
from manifest.patcher import ManifestPatcher
from selection.errors import ManifestError
from selection.models import OptionalPackage

TOOL_KEY = "depselect"


def _manifest():
    return {
        "name": "acme/skeleton",
        "description": "Skeleton application",
        "require": {"php": "^7.1", "laminas/laminas-mvc": "^3.1"},
        "require-dev": {"phpunit/phpunit": "^9.0"},
        "extra": {
            TOOL_KEY: [
                {"name": "x/a", "constraint": "^1.0"},
                {"name": "x/b", "constraint": "^2.0", "dev": True},
            ],
            "branch-alias": {"dev-master": "1.0-dev"},
        },
        "config": {"sort-packages": True},
    }


class TestManifestPatcher:
    """Tests for ManifestPatcher."""

    def test_round_trip(self):
        patcher = ManifestPatcher(TOOL_KEY)
        packages = [
            OptionalPackage("x/a", "^1.0"),
            OptionalPackage("x/b", "^2.0", dev=True),
        ]
        patched = patcher.patch(_manifest(), packages)
        assert patched["require"]["x/a"] == "^1.0"
        assert patched["require-dev"]["x/b"] == "^2.0"
        assert TOOL_KEY not in patched["extra"]
        assert patched["extra"]["branch-alias"] == {"dev-master": "1.0-dev"}

    def test_input_not_mutated(self):
        original = _manifest()
        ManifestPatcher(TOOL_KEY).patch(original, [OptionalPackage("x/a", "^1.0")])
        assert original == _manifest()

    def test_empty_selection_strips_metadata_only(self):
        patched = ManifestPatcher(TOOL_KEY).patch(_manifest(), [])
        expected = _manifest()
        del expected["extra"][TOOL_KEY]
        assert patched == expected

    def test_idempotent(self):
        patcher = ManifestPatcher(TOOL_KEY)
        once = patcher.patch(_manifest(), [])
        assert patcher.patch(once, []) == once

    def test_key_order_preserved(self):
        patched = ManifestPatcher(TOOL_KEY).patch(_manifest(), [OptionalPackage("x/a", "^1.0")])
        assert list(patched) == list(_manifest())
        assert list(patched["require"]) == ["php", "laminas/laminas-mvc", "x/a"]

    def test_collision_last_write_wins_in_place(self):
        patched = ManifestPatcher(TOOL_KEY).patch(
            _manifest(), [OptionalPackage("laminas/laminas-mvc", "^3.3")])
        assert patched["require"] == {"php": "^7.1", "laminas/laminas-mvc": "^3.3"}
        assert list(patched["require"]) == ["php", "laminas/laminas-mvc"]

    def test_missing_sections_created(self):
        manifest = {"name": "acme/app", "extra": {TOOL_KEY: []}}
        patched = ManifestPatcher(TOOL_KEY).patch(manifest, [OptionalPackage("x/b", "^2.0", dev=True)])
        assert patched == {"name": "acme/app", "require-dev": {"x/b": "^2.0"}}

    def test_empty_extra_removed(self):
        manifest = {"name": "acme/app", "extra": {TOOL_KEY: [{"name": "x/a", "constraint": "^1"}]}}
        assert ManifestPatcher(TOOL_KEY).patch(manifest, []) == {"name": "acme/app"}

    def test_declarations(self):
        patcher = ManifestPatcher(TOOL_KEY)
        assert [d["name"] for d in patcher.declarations(_manifest())] == ["x/a", "x/b"]
        assert patcher.declarations({}) == []
        assert patcher.declarations({"extra": {TOOL_KEY: {"name": "x/a"}}}) == []
        assert patcher.declarations({"extra": []}) == []

    def test_requirements(self):
        requirements = ManifestPatcher(TOOL_KEY).requirements(
            _manifest(), [OptionalPackage("x/a", "^1.0"), OptionalPackage("x/b", "^2.0", dev=True)])
        assert requirements == {
            "require": {"php": "^7.1", "laminas/laminas-mvc": "^3.1", "x/a": "^1.0"},
            "require-dev": {"phpunit/phpunit": "^9.0", "x/b": "^2.0"},
        }


class TestManifestFile:
    """Tests for ManifestFile."""

    def test_read_missing(self, tmp_path):
        with pytest.raises(ManifestError) as exc_info:
            ManifestFile(str(tmp_path / "composer.json")).read()
        assert "not found" in str(exc_info.value)

    def test_read_invalid_json(self, tmp_path):
        path = tmp_path / "composer.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ManifestError):
            ManifestFile(str(path)).read()

    def test_read_non_object(self, tmp_path):
        path = tmp_path / "composer.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ManifestError):
            ManifestFile(str(path)).read()

    def test_write_keeps_indent_and_order(self, tmp_path):
        path = tmp_path / "composer.json"
        path.write_text(json.dumps(_manifest(), indent=2) + "\n", encoding="utf-8")
        manifest_file = ManifestFile(str(path))
        document = manifest_file.read()
        manifest_file.write(document)
        assert path.read_text(encoding="utf-8") == json.dumps(_manifest(), indent=2) + "\n"

    def test_write_unicode_and_slashes(self, tmp_path):
        path = tmp_path / "composer.json"
        manifest_file = ManifestFile(str(path))
        manifest_file.write({"description": "Café", "require": {"x/a": "^1.0"}})
        text = path.read_text(encoding="utf-8")
        assert "Café" in text
        assert '"x/a"' in text
        assert text.endswith("}\n")
        assert '\n    "description"' in text

    def test_write_leaves_no_temp_files(self, tmp_path):
        path = tmp_path / "composer.json"
        ManifestFile(str(path)).write({"name": "acme/app"})
        assert os.listdir(tmp_path) == ["composer.json"]

    def test_detect_indent(self):
        assert detect_indent('{\n  "a": 1\n}') == 2
        assert detect_indent('{\n\t"a": 1\n}') == "\t"
        assert detect_indent('{"a": 1}') == 4
