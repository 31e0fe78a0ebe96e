from __future__ import annotations

import logging
from typing import Any

from result import Result

from awstui.models.records import HostedZone, Route53Record, Tag
from awstui.repo.base import call
from awstui.services.formatting import last_segment

logger = logging.getLogger(__name__)


def record_from_set(data: dict[str, Any]) -> Route53Record:
    alias = data.get("AliasTarget") or {}
    ttl = data.get("TTL")
    return Route53Record(
        name=data.get("Name", ""),
        type=data.get("Type", ""),
        ttl=int(ttl) if ttl is not None else None,
        values=[item["Value"] for item in data.get("ResourceRecords", [])],
        alias_dns_name=alias.get("DNSName"),
        set_identifier=data.get("SetIdentifier"),
        weight=data.get("Weight"),
        region=data.get("Region"),
        failover=data.get("Failover"),
        geo_location=data.get("GeoLocation"),
        multi_value=bool(data.get("MultiValueAnswer", False)),
        raw=data,
    )


def zone_from_api(data: dict[str, Any]) -> HostedZone:
    config = data.get("Config") or {}
    return HostedZone(
        id=last_segment(data.get("Id", "")),
        name=data.get("Name", ""),
        record_count=data.get("ResourceRecordSetCount"),
        private=bool(config.get("PrivateZone", False)),
        comment=config.get("Comment", ""),
    )


class Route53Repo:
    def __init__(self, client: Any) -> None:
        self._client = client

    def list_hosted_zones(self) -> Result[list[HostedZone], str]:
        def fetch() -> list[HostedZone]:
            zones: list[HostedZone] = []
            for page in self._client.get_paginator("list_hosted_zones").paginate():
                zones.extend(zone_from_api(zone) for zone in page.get("HostedZones", []))
            return zones

        return call("ListHostedZones", fetch)

    def zone_tags(self, zone_id: str) -> Result[list[Tag], str]:
        def fetch() -> list[Tag]:
            response = self._client.list_tags_for_resource(ResourceType="hostedzone", ResourceId=zone_id)
            tags = response.get("ResourceTagSet", {}).get("Tags", [])
            return [Tag(key=tag["Key"], value=tag.get("Value", "")) for tag in tags]

        return call("ListTagsForResource", fetch)

    def list_records(self, zone_id: str) -> Result[list[Route53Record], str]:
        def fetch() -> list[Route53Record]:
            records: list[Route53Record] = []
            paginator = self._client.get_paginator("list_resource_record_sets")
            for page in paginator.paginate(HostedZoneId=zone_id):
                records.extend(record_from_set(item) for item in page.get("ResourceRecordSets", []))
            return records

        return call("ListResourceRecordSets", fetch)

    def create_record(self, zone_id: str, record: Route53Record) -> Result[None, str]:
        return self._change(zone_id, [("CREATE", record)])

    def update_record(self, zone_id: str, old: Route53Record, new: Route53Record) -> Result[None, str]:
        # record sets are replaced as a whole, in one batch
        return self._change(zone_id, [("DELETE", old), ("CREATE", new)])

    def delete_record(self, zone_id: str, record: Route53Record) -> Result[None, str]:
        return self._change(zone_id, [("DELETE", record)])

    def _change(self, zone_id: str, changes: list[tuple[str, Route53Record]]) -> Result[None, str]:
        batch = {
            "Changes": [
                {"Action": action, "ResourceRecordSet": record.to_record_set()} for action, record in changes
            ]
        }
        logger.info("Changing %s in zone %s", ", ".join(f"{a} {r.name} {r.type}" for a, r in changes), zone_id)
        return call(
            "ChangeResourceRecordSets",
            lambda: self._client.change_resource_record_sets(HostedZoneId=zone_id, ChangeBatch=batch),
        ).map(lambda _: None)
