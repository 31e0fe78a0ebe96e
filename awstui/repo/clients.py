from __future__ import annotations

from functools import cached_property
from typing import Any

import boto3

from awstui.repo.identity import IdentityRepo
from awstui.repo.route53 import Route53Repo
from awstui.repo.s3 import S3Repo


class Repositories:
    """SDK clients created on first use, one per service, from a shared session."""

    def __init__(self, session: boto3.session.Session) -> None:
        self.session = session
        self._clients: dict[str, Any] = {}

    @property
    def region(self) -> str:
        return self.session.region_name or ""

    def client(self, name: str) -> Any:
        if name not in self._clients:
            self._clients[name] = self.session.client(name)
        return self._clients[name]

    @cached_property
    def s3(self) -> S3Repo:
        return S3Repo(self.client("s3"))

    @cached_property
    def route53(self) -> Route53Repo:
        return Route53Repo(self.client("route53"))

    @cached_property
    def identity(self) -> IdentityRepo:
        return IdentityRepo(self.client("sts"), self.client("iam"))
