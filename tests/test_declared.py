"""Tests for the declared record source."""

from bind_records.config.config import Config
from bind_records.source.declared import DeclaredRecordSource


def _config(**overrides):
    records = overrides.pop("records")
    return Config(records=records, **overrides)


class TestRecords:
    def test_defaults_applied(self):
        config = _config(
            records=[{"name": "www.example.com.", "zone": "example.com.", "type": "A",
                      "content": ["10.0.0.1"]}],
            default_server="ns1", default_ddns_key="/k", default_ttl=120,
        )
        (record,) = DeclaredRecordSource(config).records()
        assert record.name == "www.example.com"
        assert record.zone == "example.com"
        assert record.server == "ns1"
        assert record.ddns_key == "/k"
        assert record.ttl == 120
        assert record.content == ("10.0.0.1",)
        assert record.old_type is None
        assert record.old_content is None

    def test_record_values_win(self):
        config = _config(
            records=[{"name": "a.example.com", "zone": "example.com", "type": "CNAME",
                      "content": "b.example.com.", "server": "ns2", "ttl": 60,
                      "ensure": "absent", "ddns_key": "/other"}],
            default_server="ns1", default_ddns_key="/k",
        )
        (record,) = DeclaredRecordSource(config).records()
        assert record.server == "ns2"
        assert record.ttl == 60
        assert record.ensure == "absent"
        assert record.ddns_key == "/other"
        assert record.content == ("b.example.com",)

    def test_blank_zone_is_missing(self):
        config = _config(records=[{"name": "a", "zone": " ", "type": "A"}])
        (record,) = DeclaredRecordSource(config).records()
        assert record.zone is None
        assert record.target is None
