from __future__ import annotations

import json
import logging
from typing import Any

from boto3.exceptions import Boto3Error
from result import Err, Ok, Result

from awstui.models.records import S3Bucket, S3CorsRule, S3Listing, Tag
from awstui.repo.base import SDK_ERRORS, call, error_code

logger = logging.getLogger(__name__)

DELIMITER = "/"


def cors_rule(rule: dict[str, Any]) -> S3CorsRule:
    return S3CorsRule(
        allowed_methods=tuple(rule.get("AllowedMethods", [])),
        allowed_origins=tuple(rule.get("AllowedOrigins", [])),
        allowed_headers=tuple(rule.get("AllowedHeaders", [])),
        expose_headers=tuple(rule.get("ExposeHeaders", [])),
        max_age=rule.get("MaxAgeSeconds"),
        id=rule.get("ID", ""),
    )


class S3Repo:
    def __init__(self, client: Any) -> None:
        self._client = client

    def list_buckets(self) -> Result[list[S3Bucket], str]:
        def fetch() -> list[S3Bucket]:
            response = self._client.list_buckets()
            return [
                S3Bucket(name=bucket["Name"], created=bucket.get("CreationDate"))
                for bucket in response.get("Buckets", [])
            ]

        return call("ListBuckets", fetch)

    def list_objects(self, bucket: str, prefix: str = "") -> Result[S3Listing, str]:
        """One directory level under ``prefix``: sub-prefixes and object keys."""

        def fetch() -> S3Listing:
            listing = S3Listing()
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=bucket, Prefix=prefix, Delimiter=DELIMITER):
                listing.prefixes.extend(item["Prefix"] for item in page.get("CommonPrefixes", []))
                listing.keys.extend(item["Key"] for item in page.get("Contents", []))
            return listing

        return call(f"Listing s3://{bucket}/{prefix}", fetch)

    def bucket_policy(self, bucket: str) -> Result[str, str]:
        try:
            response = self._client.get_bucket_policy(Bucket=bucket)
        except SDK_ERRORS as exc:
            if error_code(exc) == "NoSuchBucketPolicy":
                return Ok("")
            logger.warning("GetBucketPolicy failed: %s", exc)
            return Err(f"GetBucketPolicy failed: {exc}")
        policy = response.get("Policy", "")
        try:
            return Ok(json.dumps(json.loads(policy), indent=2))
        except ValueError:
            return Ok(policy)

    def bucket_tags(self, bucket: str) -> Result[list[Tag], str]:
        try:
            response = self._client.get_bucket_tagging(Bucket=bucket)
        except SDK_ERRORS as exc:
            if error_code(exc) == "NoSuchTagSet":
                return Ok([])
            logger.warning("GetBucketTagging failed: %s", exc)
            return Err(f"GetBucketTagging failed: {exc}")
        return Ok([Tag(key=tag["Key"], value=tag["Value"]) for tag in response.get("TagSet", [])])

    def bucket_cors(self, bucket: str) -> Result[list[S3CorsRule], str]:
        try:
            response = self._client.get_bucket_cors(Bucket=bucket)
        except SDK_ERRORS as exc:
            if error_code(exc) == "NoSuchCORSConfiguration":
                return Ok([])
            logger.warning("GetBucketCors failed: %s", exc)
            return Err(f"GetBucketCors failed: {exc}")
        return Ok([cors_rule(rule) for rule in response.get("CORSRules", [])])

    def get_object(self, bucket: str, key: str) -> Result[bytes, str]:
        def fetch() -> bytes:
            response = self._client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read()

        return call(f"Reading s3://{bucket}/{key}", fetch)

    def object_metadata(self, bucket: str, key: str) -> Result[list[Tag], str]:
        def fetch() -> list[Tag]:
            response = self._client.head_object(Bucket=bucket, Key=key)
            entries = [
                Tag("Content-Type", response.get("ContentType", "")),
                Tag("Content-Length", str(response.get("ContentLength", ""))),
                Tag("ETag", response.get("ETag", "")),
                Tag("Last-Modified", str(response.get("LastModified", ""))),
                Tag("Storage-Class", response.get("StorageClass", "STANDARD")),
            ]
            entries.extend(Tag(name, value) for name, value in sorted(response.get("Metadata", {}).items()))
            return entries

        return call(f"Reading metadata of s3://{bucket}/{key}", fetch)

    def object_tags(self, bucket: str, key: str) -> Result[list[Tag], str]:
        def fetch() -> list[Tag]:
            response = self._client.get_object_tagging(Bucket=bucket, Key=key)
            return [Tag(key=tag["Key"], value=tag["Value"]) for tag in response.get("TagSet", [])]

        return call(f"Reading tags of s3://{bucket}/{key}", fetch)

    def upload_object(self, bucket: str, key: str, path: str, content_type: str, acl: str) -> Result[str, str]:
        extra = {"ContentType": content_type, "ACL": acl}
        logger.info("Uploading %s to s3://%s/%s", path, bucket, key)
        return call(
            f"Uploading {path}",
            lambda: self._client.upload_file(path, bucket, key, ExtraArgs=extra),
            (Boto3Error, OSError),
        ).map(lambda _: key)

    def download_object(self, bucket: str, key: str, destination: str) -> Result[str, str]:
        logger.info("Downloading s3://%s/%s to %s", bucket, key, destination)
        return call(
            f"Downloading s3://{bucket}/{key}",
            lambda: self._client.download_file(bucket, key, destination),
            (Boto3Error, OSError),
        ).map(lambda _: destination)
