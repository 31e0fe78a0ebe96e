from __future__ import annotations

from dataclasses import dataclass

from result import Err, Ok, Result

from awstui.models.records import HostedZone, Route53Record

RECORD_TYPES: tuple[str, ...] = ("A", "AAAA", "CNAME", "MX", "TXT", "NS", "SOA", "SRV", "PTR", "CAA")
DEFAULT_TTL = 300

RECORD_HEADERS: tuple[str, ...] = ("RECORD NAME", "TYPE", "ROUTING", "DIFF", "LABEL", "TTL", "ALIAS", "VALUE")
ZONE_HEADERS: tuple[str, ...] = ("ID", "NAME", "RECORDS", "VISIBILITY", "DESCRIPTION")


@dataclass(slots=True, frozen=True)
class RecordDraft:
    name: str
    type: str
    ttl: str
    value: str


def zone_root(zone_name: str) -> str:
    return zone_name.removesuffix(".")


def qualify_record_name(name: str, zone_name: str) -> str:
    """Turn what the user typed into a fully qualified, dot-terminated name.

    A dotted name that already ends with the zone is kept as typed, even
    when it only shares a suffix with the zone (``api.notexample.com`` in
    ``example.com``).
    """
    zone = zone_root(zone_name)
    name = name.strip()
    if name in ("", "@"):
        return zone + "."
    if "." in name and name.endswith(zone):
        qualified = name
    else:
        qualified = f"{name}.{zone}"
    if not qualified.endswith("."):
        qualified += "."
    return qualified


def parse_values(text: str) -> list[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]


def build_record(
    name: str,
    zone_name: str,
    record_type: str,
    ttl_text: str,
    value_text: str,
) -> Result[Route53Record, str]:
    try:
        ttl = int(ttl_text.strip())
    except ValueError:
        return Err("Invalid TTL value")
    if value_text == "":
        return Err("Value is required")
    values = parse_values(value_text)
    if not values:
        return Err("At least one value is required")
    if record_type not in RECORD_TYPES:
        return Err(f"Unsupported record type: {record_type}")
    return Ok(
        Route53Record(
            name=qualify_record_name(name, zone_name),
            type=record_type,
            ttl=ttl,
            values=values,
        )
    )


def record_draft(record: Route53Record | None, zone_name: str) -> RecordDraft:
    """Form contents for an existing record, or the defaults for a new one."""
    if record is None:
        return RecordDraft(name="", type=RECORD_TYPES[0], ttl=str(DEFAULT_TTL), value="")

    zone = zone_root(zone_name)
    full_name = record.name.removesuffix(".")
    if full_name.endswith(zone):
        name = full_name.removesuffix("." + zone)
        if name == zone:
            name = "@"
    else:
        name = full_name

    ttl = str(record.ttl) if record.ttl is not None else str(DEFAULT_TTL)
    if record.alias_dns_name:
        value = record.alias_dns_name
    else:
        value = "\n".join(record.values)
    return RecordDraft(name=name, type=record.type, ttl=ttl, value=value)


def routing_policy(record: Route53Record) -> tuple[str, str, str]:
    policy, differentiator, label = "Simple", "-", "-"
    if record.failover:
        policy, differentiator = "Failover", record.failover
    if record.region:
        policy, differentiator = "Latency", record.region
    if record.geo_location is not None:
        policy = "Geolocation"
        geo = record.geo_location
        for key in ("ContinentCode", "CountryCode", "SubdivisionCode"):
            if geo.get(key):
                differentiator = geo[key]
                break
    if record.multi_value:
        policy = "MultiValue"
    if record.weight is not None:
        policy, differentiator = "Weighted", str(record.weight)
    if policy != "Simple" and record.set_identifier:
        label = record.set_identifier
    return policy, differentiator, label


def record_row(record: Route53Record) -> list[str]:
    policy, differentiator, label = routing_policy(record)
    name = record.name.removesuffix(".")
    if record.alias_dns_name is None:
        ttl = str(record.ttl) if record.ttl is not None else "-"
        return [name, record.type, policy, differentiator, label, ttl, "No", ", ".join(record.values)]
    return [name, record.type, policy, differentiator, label, "-", "Yes", record.alias_dns_name]


def zone_row(zone: HostedZone) -> list[str]:
    count = str(zone.record_count) if zone.record_count is not None else ""
    return [zone.id, zone.name, count, "Private" if zone.private else "Public", zone.comment]
