"""Tests for configuration loading and precedence."""

from pathlib import Path

import pytest

from sitrep.config import DEFAULT_CONFIG, SitrepConfig, find_project_config, load_config
from sitrep.exceptions import ConfigurationError, InvalidConfigError


class TestSitrepConfig:
    """Defaults and validation."""

    def test_defaults(self):
        """An unconfigured project has no exclusions."""
        assert DEFAULT_CONFIG.excluded == []
        assert DEFAULT_CONFIG.extensions == [".swift"]
        assert DEFAULT_CONFIG.static_modifiers == ["static", "class"]
        assert DEFAULT_CONFIG.workers == 1
        assert DEFAULT_CONFIG.allow_syntax_errors is True

    def test_invalid_workers(self):
        """workers must be positive."""
        with pytest.raises(InvalidConfigError):
            SitrepConfig(workers=0)

    def test_invalid_extension(self):
        """Extensions need a leading dot."""
        with pytest.raises(InvalidConfigError):
            SitrepConfig(extensions=["swift"])

    def test_invalid_format(self):
        """Unknown report formats are rejected."""
        with pytest.raises(InvalidConfigError):
            SitrepConfig(report_format="xml")

    def test_excluded_paths(self):
        """Exclusions resolve against the scan root."""
        config = SitrepConfig(excluded=["Pods", "Vendor/Lib"])
        assert config.excluded_paths(Path("/app")) == ["/app/Pods", "/app/Vendor/Lib"]

    def test_excluded_paths_relative_root(self):
        """A relative root gives normalised prefixes."""
        config = SitrepConfig(excluded=["Pods/", "Vendor/Lib"])
        assert config.excluded_paths(Path(".")) == ["Pods", "Vendor/Lib"]


class TestLoadConfig:
    """Sources and precedence."""

    def test_missing_project_config_uses_defaults(self, tmp_path):
        """No config file is not an error."""
        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_sitrep_yml(self, tmp_path):
        """The .sitrep.yml excluded list is read."""
        (tmp_path / ".sitrep.yml").write_text("excluded:\n  - Pods\n  - Carthage\n")
        assert load_config(tmp_path).excluded == ["Pods", "Carthage"]

    def test_null_excluded(self, tmp_path):
        """'excluded: ~' means no exclusions."""
        (tmp_path / ".sitrep.yml").write_text("excluded: ~\n")
        assert load_config(tmp_path).excluded == []

    def test_toml(self, tmp_path):
        """sitrep.toml is read as TOML."""
        (tmp_path / "sitrep.toml").write_text('excluded = ["Pods"]\nworkers = 2\n')
        config = load_config(tmp_path)
        assert config.excluded == ["Pods"]
        assert config.workers == 2

    def test_find_project_config_order(self, tmp_path):
        """.sitrep.yml wins over sitrep.toml."""
        (tmp_path / "sitrep.toml").write_text("")
        (tmp_path / ".sitrep.yml").write_text("")
        assert find_project_config(tmp_path) == tmp_path / ".sitrep.yml"

    def test_explicit_file_missing(self, tmp_path):
        """A missing explicit config file is an error."""
        with pytest.raises(ConfigurationError):
            load_config(tmp_path, config_file=tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path):
        """Unparsable YAML is a ConfigurationError."""
        path = tmp_path / "bad.yml"
        path.write_text("excluded: [unterminated\n")
        with pytest.raises(ConfigurationError):
            load_config(config_file=path)

    def test_unknown_key(self, tmp_path):
        """Unknown keys are rejected."""
        (tmp_path / ".sitrep.yml").write_text("colour: blue\n")
        with pytest.raises(InvalidConfigError):
            load_config(tmp_path)

    def test_precedence(self, tmp_path, monkeypatch):
        """File < environment < explicit overrides."""
        (tmp_path / ".sitrep.yml").write_text("excluded: [Pods]\nworkers: 2\n")
        monkeypatch.setenv("SITREP_WORKERS", "3")
        monkeypatch.setenv("SITREP_EXCLUDED", "Vendor, Carthage")
        config = load_config(tmp_path, workers=4)
        assert config.workers == 4
        assert config.excluded == ["Vendor", "Carthage"]

    def test_none_overrides_ignored(self, tmp_path):
        """None overrides leave lower layers alone."""
        (tmp_path / ".sitrep.yml").write_text("workers: 2\n")
        assert load_config(tmp_path, workers=None).workers == 2

    def test_bad_env_bool(self, monkeypatch):
        """An unparsable boolean variable is an InvalidConfigError."""
        monkeypatch.setenv("SITREP_ALLOW_SYNTAX_ERRORS", "maybe")
        with pytest.raises(InvalidConfigError):
            load_config()
