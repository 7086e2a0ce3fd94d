"""Tests for wfgen.config.settings."""

from __future__ import annotations

import pytest
import yaml

from wfgen.config.models import GeneratorSettings
from wfgen.config.settings import DEFAULT_SETTINGS_FILE, load_settings


def _write(path, data) -> None:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


class TestDefaults:
    def test_no_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        s = load_settings()
        assert s == GeneratorSettings()
        assert s.bootstrap_dir == "bootstrap"
        assert s.workflows_dir == ".github/workflows"
        assert s.backend_dir == "backend"
        assert s.default_service == "api"
        assert s.terraform_version == "1.13.0"


class TestYamlFile:
    def test_explicit_path(self, tmp_path):
        cfg = tmp_path / "settings.yaml"
        _write(cfg, {"workflow_generator": {"backend_dir": "services", "terraform_version": "1.9.8"}})
        s = load_settings(cfg)
        assert s.backend_dir == "services"
        assert s.terraform_version == "1.9.8"
        assert s.bootstrap_dir == "bootstrap"

    def test_default_file_picked_up(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        _write(tmp_path / DEFAULT_SETTINGS_FILE, {"workflow_generator": {"default_service": "web"}})
        assert load_settings().default_service == "web"

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "absent.yaml")

    def test_empty_file(self, tmp_path):
        cfg = tmp_path / "empty.yaml"
        cfg.write_text("", encoding="utf-8")
        assert load_settings(cfg) == GeneratorSettings()

    def test_unknown_key_rejected(self, tmp_path):
        cfg = tmp_path / "bad.yaml"
        _write(cfg, {"workflow_generator": {"backend_directory": "x"}})
        with pytest.raises(ValueError):
            load_settings(cfg)

    def test_invalid_yaml(self, tmp_path):
        cfg = tmp_path / "broken.yaml"
        cfg.write_text("workflow_generator: {backend_dir: [\n", encoding="utf-8")
        with pytest.raises(ValueError, match="invalid YAML"):
            load_settings(cfg)

    def test_section_not_mapping(self, tmp_path):
        cfg = tmp_path / "bad.yaml"
        _write(cfg, {"workflow_generator": ["a", "b"]})
        with pytest.raises(ValueError, match="must be a mapping"):
            load_settings(cfg)

    def test_top_level_not_mapping(self, tmp_path):
        cfg = tmp_path / "bad.yaml"
        _write(cfg, ["a"])
        with pytest.raises(ValueError, match="top level"):
            load_settings(cfg)


class TestOverrides:
    def test_override_wins(self, tmp_path):
        cfg = tmp_path / "settings.yaml"
        _write(cfg, {"workflow_generator": {"backend_dir": "services"}})
        assert load_settings(cfg, backend_dir="apps").backend_dir == "apps"

    def test_none_override_ignored(self, tmp_path):
        cfg = tmp_path / "settings.yaml"
        _write(cfg, {"workflow_generator": {"backend_dir": "services"}})
        assert load_settings(cfg, backend_dir=None).backend_dir == "services"
