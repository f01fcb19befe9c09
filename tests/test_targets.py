"""Tests for transfer target resolution."""

from bind_records.models.errors import ResolutionError
from bind_records.models.models import Record, Target
from bind_records.registry.targets import resolve_targets


def _record(name, zone=None, server=None):
    return Record(name=name, record_type="A", content=("10.0.0.1",), zone=zone, server=server)


class TestResolveTargets:
    def test_deduplicates_pairs(self):
        targets, errors = resolve_targets([
            _record("a.example.com", "example.com", "ns1"),
            _record("b.example.com", "example.com", "ns1"),
            _record("c.example.com", "example.com"),
            _record("d.example.org", "example.org", "ns1"),
        ])
        assert targets == [
            Target("example.com", "ns1"),
            Target("example.com", None),
            Target("example.org", "ns1"),
        ]
        assert errors == []

    def test_missing_zone_is_scoped_to_record(self):
        targets, errors = resolve_targets([
            _record("a.example.com", "example.com"),
            _record("lost.example.com"),
        ])
        assert targets == [Target("example.com")]
        assert len(errors) == 1
        assert isinstance(errors[0], ResolutionError)
        assert errors[0].record_id == "lost.example.com:A"

    def test_empty_input(self):
        assert resolve_targets([]) == ([], [])
