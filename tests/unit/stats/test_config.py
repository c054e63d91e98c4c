"""Tests for the statistics configuration."""
import pytest

from lineage.core.exceptions import ValidationError
from lineage.stats.config import StatsConfig, load_config


class TestStatsConfig:
    """Tests for StatsConfig construction."""

    def test_defaults(self):
        """Defaults match the documented chart sizes and limits."""
        config = StatsConfig()
        assert config.default_top_n == 10
        assert config.max_alive_age == 120
        assert config.small_chart_size == "440x125"
        assert config.large_chart_size == "900x200"

    def test_from_dict(self):
        """Known keys override defaults, integers are coerced."""
        config = StatsConfig.from_dict({"default_top_n": "5", "default_locale": "fr"})
        assert config.default_top_n == 5
        assert config.default_locale == "fr"

    def test_unknown_key_rejected(self):
        """Unknown keys raise ValidationError."""
        with pytest.raises(ValidationError, match="Unknown keys: top_n"):
            StatsConfig.from_dict({"top_n": 5})

    @pytest.mark.parametrize("value", [0, -1, "ten"])
    def test_invalid_integer_rejected(self, value):
        """Integer settings must be positive numbers."""
        with pytest.raises(ValidationError):
            StatsConfig.from_dict({"default_top_n": value})

    def test_to_dict_round_trips(self):
        """to_dict feeds back into from_dict."""
        config = StatsConfig(default_top_n=3)
        assert StatsConfig.from_dict(config.to_dict()) == config


class TestLoadConfig:
    """Tests for loading YAML configuration files."""

    def test_load_yaml(self, tmp_path):
        """Settings are read from a YAML mapping."""
        path = tmp_path / "lineage.yaml"
        path.write_text("default_top_n: 5\nrecord_url: \"/g/{tree}/{kind}/{xref}\"\n")
        config = load_config(path)
        assert config.default_top_n == 5
        assert config.record_url == "/g/{tree}/{kind}/{xref}"

    def test_empty_file_gives_defaults(self, tmp_path):
        """An empty file yields the defaults."""
        path = tmp_path / "lineage.yaml"
        path.write_text("")
        assert load_config(path) == StatsConfig()

    def test_non_mapping_rejected(self, tmp_path):
        """A YAML list is not a configuration."""
        path = tmp_path / "lineage.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValidationError, match="expected a mapping"):
            load_config(path)

    def test_missing_default_file(self, tmp_path, monkeypatch):
        """Without an explicit path and no default file, defaults are used."""
        monkeypatch.setattr("lineage.stats.config.CONFIG_PATH", tmp_path / "missing.yaml")
        assert load_config() == StatsConfig()
