from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(slots=True, frozen=True)
class CallerIdentity:
    account: str
    arn: str
    user_id: str


@dataclass(slots=True, frozen=True)
class Tag:
    key: str
    value: str


@dataclass(slots=True, frozen=True)
class S3Bucket:
    name: str
    created: datetime | None = None


@dataclass(slots=True)
class S3Listing:
    prefixes: list[str] = field(default_factory=list)
    keys: list[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class HostedZone:
    id: str
    name: str
    record_count: int | None = None
    private: bool = False
    comment: str = ""


@dataclass(slots=True)
class Route53Record:
    name: str
    type: str
    ttl: int | None = None
    values: list[str] = field(default_factory=list)
    alias_dns_name: str | None = None
    set_identifier: str | None = None
    weight: int | None = None
    region: str | None = None
    failover: str | None = None
    geo_location: dict[str, str] | None = None
    multi_value: bool = False
    raw: dict[str, Any] | None = None

    def to_record_set(self) -> dict[str, Any]:
        if self.raw is not None:
            return self.raw
        payload: dict[str, Any] = {"Name": self.name, "Type": self.type}
        if self.ttl is not None:
            payload["TTL"] = self.ttl
        payload["ResourceRecords"] = [{"Value": value} for value in self.values]
        return payload


@dataclass(slots=True, frozen=True)
class S3CorsRule:
    allowed_methods: tuple[str, ...]
    allowed_origins: tuple[str, ...]
    allowed_headers: tuple[str, ...] = ()
    expose_headers: tuple[str, ...] = ()
    max_age: int | None = None
    id: str = ""
