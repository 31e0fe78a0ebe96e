from __future__ import annotations

from result import Err, Ok

from awstui.models.records import HostedZone, Route53Record
from awstui.services.records import (
    DEFAULT_TTL,
    build_record,
    parse_values,
    qualify_record_name,
    record_draft,
    record_row,
    routing_policy,
    zone_row,
)

ZONE = "example.com."


class TestQualifyRecordName:
    def test_apex(self) -> None:
        assert qualify_record_name("", ZONE) == "example.com."
        assert qualify_record_name("@", ZONE) == "example.com."

    def test_relative_name(self) -> None:
        assert qualify_record_name("www", ZONE) == "www.example.com."

    def test_already_qualified(self) -> None:
        assert qualify_record_name("api.example.com", ZONE) == "api.example.com."

    def test_suffix_match_is_kept_as_typed(self) -> None:
        assert qualify_record_name("api.notexample.com", ZONE) == "api.notexample.com."


def test_parse_values_trims_blanks() -> None:
    assert parse_values(" 1.2.3.4 \n\n  5.6.7.8\n ") == ["1.2.3.4", "5.6.7.8"]


class TestBuildRecord:
    def test_valid(self) -> None:
        result = build_record("www", ZONE, "A", "60", "1.2.3.4\n5.6.7.8")
        assert isinstance(result, Ok)
        record = result.unwrap()
        assert record.name == "www.example.com."
        assert record.ttl == 60
        assert record.values == ["1.2.3.4", "5.6.7.8"]
        assert record.to_record_set() == {
            "Name": "www.example.com.",
            "Type": "A",
            "TTL": 60,
            "ResourceRecords": [{"Value": "1.2.3.4"}, {"Value": "5.6.7.8"}],
        }

    def test_bad_ttl(self) -> None:
        assert build_record("www", ZONE, "A", "soon", "1.2.3.4") == Err("Invalid TTL value")

    def test_missing_value(self) -> None:
        assert build_record("www", ZONE, "A", "60", "") == Err("Value is required")

    def test_only_blank_values(self) -> None:
        assert build_record("www", ZONE, "A", "60", "\n  \n") == Err("At least one value is required")


def test_draft_for_new_record() -> None:
    draft = record_draft(None, ZONE)
    assert draft.ttl == str(DEFAULT_TTL)
    assert draft.name == ""


def test_draft_strips_zone_and_shows_apex() -> None:
    apex = Route53Record(name="example.com.", type="A", ttl=300, values=["1.2.3.4"])
    www = Route53Record(name="www.example.com.", type="CNAME", ttl=60, values=["a.example.net"])

    assert record_draft(apex, ZONE).name == "@"
    draft = record_draft(www, ZONE)
    assert (draft.name, draft.type, draft.ttl, draft.value) == ("www", "CNAME", "60", "a.example.net")


def test_draft_uses_alias_target() -> None:
    alias = Route53Record(name="cdn.example.com.", type="A", alias_dns_name="d111.cloudfront.net.")
    assert record_draft(alias, ZONE).value == "d111.cloudfront.net."


def test_routing_policy() -> None:
    assert routing_policy(Route53Record(name="a.", type="A")) == ("Simple", "-", "-")
    weighted = Route53Record(name="a.", type="A", weight=10, set_identifier="blue")
    assert routing_policy(weighted) == ("Weighted", "10", "blue")
    geo = Route53Record(name="a.", type="A", geo_location={"CountryCode": "DE"}, set_identifier="de")
    assert routing_policy(geo) == ("Geolocation", "DE", "de")


def test_rows() -> None:
    record = Route53Record(name="www.example.com.", type="A", ttl=60, values=["1.2.3.4", "5.6.7.8"])
    assert record_row(record) == ["www.example.com", "A", "Simple", "-", "-", "60", "No", "1.2.3.4, 5.6.7.8"]
    zone = HostedZone(id="Z1", name=ZONE, record_count=4, private=True, comment="internal")
    assert zone_row(zone) == ["Z1", ZONE, "4", "Private", "internal"]
