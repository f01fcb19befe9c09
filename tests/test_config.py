"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from bind_records.config.config import Config, RecordConfig

CONFIG_YAML = """
transport:
  dig: /usr/bin/dig
  tries: 3
  timeout: 1m
defaults:
  server: ns1.example.com
  ddns_key: ${DDNS_KEY:-/etc/bind/ddns.key}
  ttl: 600
controller:
  dry_run: true
logging:
  level: debug
records:
  - name: www.example.com
    zone: example.com
    type: a
    content: 10.0.0.1
  - name: example.com.
    zone: example.com.
    type: TXT
    content: ["v=spf1 -all"]
    ensure: absent
    ttl: 60
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "bind-records.yaml"
    path.write_text(CONFIG_YAML)
    return path


class TestFromYaml:
    def test_sections_flattened(self, config_file, monkeypatch):
        monkeypatch.delenv("DDNS_KEY", raising=False)
        config = Config.from_yaml(config_file)
        assert config.dig == "/usr/bin/dig"
        assert config.nsupdate == "nsupdate"
        assert config.tries == 3
        assert config.timeout == "1m"
        assert config.default_server == "ns1.example.com"
        assert config.default_ddns_key == "/etc/bind/ddns.key"
        assert config.default_ttl == 600
        assert config.dry_run is True
        assert config.once is True
        assert config.log_level == "debug"
        assert len(config.records) == 2

    def test_env_substitution(self, config_file, monkeypatch):
        monkeypatch.setenv("DDNS_KEY", "/run/secrets/key")
        assert Config.from_yaml(config_file).default_ddns_key == "/run/secrets/key"

    def test_unset_variable_without_fallback_is_empty(self, monkeypatch):
        monkeypatch.delenv("BIND_RECORDS_UNSET", raising=False)
        assert Config._substitute_env_vars("key: \"${BIND_RECORDS_UNSET}\"") == 'key: ""'

    def test_records_normalized(self, config_file):
        first, second = Config.from_yaml(config_file).records
        assert first.type == "A"
        assert first.content == ["10.0.0.1"]
        assert first.ensure == "present"
        assert second.ensure == "absent"
        assert second.ttl == 60

    def test_missing_file_uses_defaults(self, tmp_path):
        config = Config.from_yaml(tmp_path / "missing.yaml")
        assert config.records == []
        assert config.default_ttl == 300


class TestRecordConfig:
    def test_invalid_ensure(self):
        with pytest.raises(ValidationError):
            RecordConfig(name="a", type="A", content=["1"], ensure="maybe")

    def test_zone_optional(self):
        assert RecordConfig(name="a", type="A").zone is None


class TestParseDuration:
    @pytest.mark.parametrize("value,expected", [
        ("30s", 30), ("15m", 900), ("2h", 7200), ("1d", 86400), ("45", 45),
    ])
    def test_units(self, value, expected):
        assert Config.parse_duration(value) == expected

    def test_invalid_falls_back(self):
        assert Config.parse_duration("soon", default=30) == 30
        assert Config.parse_duration("") == 60
