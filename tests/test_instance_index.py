"""Tests for the live record index."""

from bind_records.models.models import Record, Target
from bind_records.provider.transcript import parse_transcript
from bind_records.registry.instance_index import InstanceIndex

TARGET = Target("example.com", "ns1")


def _index(transcript, target=TARGET):
    parsed = parse_transcript(transcript, zone=target.zone, server=target.server)
    return InstanceIndex({target: parsed.records})


def _desired(name, record_type, target=TARGET):
    return Record(
        name=name, record_type=record_type, content=("x",),
        zone=target.zone, server=target.server,
    )


class TestInstanceIndex:
    def test_len_and_iter(self):
        index = _index(
            "www.example.com. 300 IN A 10.0.0.1\n"
            "www.example.com. 300 IN A 10.0.0.2\n"
            "example.com. 300 IN TXT hi\n"
        )
        assert len(index) == 2
        assert {r.id for r in index} == {"www.example.com:A", "example.com:TXT"}

    def test_lookup_same_type(self):
        index = _index(
            "www.example.com. 300 IN A 10.0.0.1\nwww.example.com. 300 IN TXT hi\n"
        )
        assert index.lookup(_desired("www.example.com", "TXT")).content == ("hi",)

    def test_lookup_is_case_insensitive(self):
        index = _index("WWW.Example.com. 300 IN A 10.0.0.1\n")
        assert index.lookup(_desired("www.example.com", "A")) is not None

    def test_lookup_type_change_single_record(self):
        index = _index("www.example.com. 300 IN A 10.0.0.1\n")
        live = index.lookup(_desired("www.example.com", "CNAME"))
        assert live.old_type == "A"

    def test_lookup_ambiguous_type_change(self):
        index = _index(
            "www.example.com. 300 IN A 10.0.0.1\nwww.example.com. 300 IN TXT hi\n"
        )
        assert index.lookup(_desired("www.example.com", "CNAME")) is None

    def test_lookup_scoped_to_target(self):
        index = _index("www.example.com. 300 IN A 10.0.0.1\n")
        other = Target("example.com", "ns2")
        assert index.lookup(_desired("www.example.com", "A", other)) is None
        assert not index.has_target(other)
        assert index.has_target(TARGET)

    def test_lookup_without_zone(self):
        index = _index("www.example.com. 300 IN A 10.0.0.1\n")
        assert index.lookup(Record(name="www.example.com", record_type="A")) is None

    def test_lookup_type_change_skips_declared_type(self):
        index = _index("mail.example.com. 300 IN A 10.0.0.1\n")
        assert index.lookup(_desired("mail.example.com", "TXT"), {"A", "TXT"}) is None
        assert index.lookup(_desired("mail.example.com", "TXT"), {"TXT"}).record_type == "A"

    def test_lookup_absent_matches_same_type_only(self):
        index = _index("mail.example.com. 300 IN A 10.0.0.1\n")
        absent = Record(
            name="mail.example.com", record_type="MX", ensure="absent",
            zone=TARGET.zone, server=TARGET.server,
        )
        assert index.lookup(absent) is None
