from __future__ import annotations

import json
from pathlib import Path

import pytest

from lib_script_log.adapters.file_loaders import structured as structured_module
from lib_script_log.adapters.file_loaders.structured import JSONFileLoader, TOMLFileLoader, YAMLFileLoader, loader_for
from lib_script_log.domain.errors import InvalidFormat, NotFound


def test_toml_loader(tmp_path: Path) -> None:
    path = tmp_path / "settings.toml"
    path.write_text('[script_log]\nmode = "SilentMode"\n', encoding="utf-8")
    assert TOMLFileLoader().load(str(path))["script_log"]["mode"] == "SilentMode"


def test_toml_loader_missing_file(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        TOMLFileLoader().load(str(tmp_path / "missing.toml"))


def test_toml_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "settings.toml"
    path.write_text("mode = \n", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        TOMLFileLoader().load(str(path))


def test_json_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{invalid}", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        JSONFileLoader().load(str(path))


def test_json_loader_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        JSONFileLoader().load(str(path))


def test_json_loader_valid(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"disable_file_logging": True}), encoding="utf-8")
    assert JSONFileLoader().load(str(path))["disable_file_logging"] is True


@pytest.mark.skipif(structured_module.yaml is None, reason="PyYAML not available")
def test_yaml_loader_handles_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("# empty file\n", encoding="utf-8")
    assert YAMLFileLoader().load(str(path)) == {}


@pytest.mark.skipif(structured_module.yaml is None, reason="PyYAML not available")
def test_yaml_loader_reads_section(tmp_path: Path) -> None:
    path = tmp_path / "settings.yml"
    path.write_text("script_log:\n  wrapper_names: [emit, Write-Log]\n", encoding="utf-8")
    assert YAMLFileLoader().load(str(path))["script_log"]["wrapper_names"] == ["emit", "Write-Log"]


def test_loader_for_rejects_unknown_suffix() -> None:
    assert isinstance(loader_for("a.json"), JSONFileLoader)
    assert isinstance(loader_for("a.yml"), YAMLFileLoader)
    with pytest.raises(InvalidFormat):
        loader_for("settings.ini")
