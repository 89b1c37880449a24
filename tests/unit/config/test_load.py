"""
Tests for dimple.config.load

Verify config loading/saving.
"""

import pytest
import tempfile
from pathlib import Path
from dimple.config.load import (
    load_config,
    save_config,
    config_from_dict,
    config_to_dict,
    apply_overrides,
)
from dimple.config.schema import DimpleConfig, ProfileConfig
from dimple.core.exceptions import ConfigError


class TestConfigFromDict:
    """Tests for config_from_dict."""
    
    def test_empty_dict_uses_defaults(self):
        cfg = config_from_dict({})
        assert cfg.device == "cpu"
        assert cfg.profile.matrixplot_sort is True
    
    def test_partial_override(self):
        cfg = config_from_dict({
            "verbose": True,
            "profile": {"plot_transform": False, "pdm_thresholds": [1, 2]},
        })
        assert cfg.verbose is True
        assert cfg.profile.plot_transform is False
        assert cfg.profile.pdm_thresholds == (1, 2)
        assert cfg.profile.matrixplot_sort is True  # Default preserved
    
    def test_unknown_top_level_key(self):
        with pytest.raises(ConfigError, match="Unknown"):
            config_from_dict({"seed": 1})
    
    def test_unknown_nested_key(self):
        with pytest.raises(ConfigError):
            config_from_dict({"profile": {"bogus": 1}})
    
    def test_invalid_value(self):
        with pytest.raises(ConfigError):
            config_from_dict({"profile": {"pdm_thresholds": [10, 5]}})
    
    def test_non_mapping(self):
        with pytest.raises(ConfigError):
            config_from_dict([1, 2])


class TestConfigToDict:
    """Tests for config_to_dict."""
    
    def test_roundtrip(self):
        cfg1 = DimpleConfig(profile=ProfileConfig(pdm_thresholds=(3, 30)), verbose=True)
        d = config_to_dict(cfg1)
        cfg2 = config_from_dict(d)
        
        assert cfg2.profile.pdm_thresholds == (3, 30)
        assert cfg2.verbose is True
        assert cfg2.plot.matrix_title == cfg1.plot.matrix_title


class TestLoadSaveConfig:
    """Tests for load_config and save_config."""
    
    def test_save_and_load(self):
        cfg1 = DimpleConfig.unsorted_raw()
        
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.yaml"
            save_config(cfg1, path)
            cfg2 = load_config(path)
        
        assert cfg2.profile.matrixplot_sort is False
        assert cfg2.profile.plot_transform is False
        assert cfg2.profile.pdm_thresholds == cfg1.profile.pdm_thresholds
    
    def test_missing_file(self):
        with pytest.raises(ConfigError, match="not found"):
            load_config("/nonexistent/config.yaml")
    
    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("profile: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)
    
    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        cfg = load_config(path)
        assert cfg.profile.pdm_thresholds == DimpleConfig().profile.pdm_thresholds


class TestApplyOverrides:
    """Tests for apply_overrides."""
    
    def test_overrides_applied(self):
        base = DimpleConfig(verbose=True)
        cfg = apply_overrides(base, device="cpu", matrixplot_sort=False, verbose=False)
        
        assert cfg.profile.matrixplot_sort is False
        assert cfg.verbose is False
        assert base.profile.matrixplot_sort is True  # Original untouched
    
    def test_none_ignored(self):
        cfg = apply_overrides(DimpleConfig(), device=None, plot_transform=None)
        assert cfg.device == "cpu"
        assert cfg.profile.plot_transform is True
    
    def test_invalid_device_rejected_immediately(self):
        with pytest.raises(ConfigError, match="device"):
            apply_overrides(DimpleConfig(), device="not_a_device")
    
    def test_invalid_profile_value_rejected(self):
        with pytest.raises(ConfigError):
            apply_overrides(DimpleConfig(), high_missingness_cutoff=2.0)
    
    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown override"):
            apply_overrides(DimpleConfig(), seed=1)
    
    def test_plot_settings_preserved(self):
        base = config_from_dict({"plot": {"missing_color": "black"}})
        cfg = apply_overrides(base, verbose=True)
        assert cfg.plot.missing_color == "black"
