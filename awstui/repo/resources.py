from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator

from result import Result

from awstui.repo.base import call
from awstui.services.catalog import favorite_ref
from awstui.services.formatting import format_time, last_segment

Rows = list[list[str]]


@dataclass(slots=True, frozen=True)
class Listing:
    """A read-only table of one resource type."""

    client: str
    headers: tuple[str, ...]
    fetch: Callable[[Any], Rows]


def run_listing(listing: Listing, client: Any) -> Result[Rows, str]:
    return call(f"Listing {listing.client}", lambda: listing.fetch(client))


def _pages(client: Any, operation: str, **kwargs: Any) -> Iterator[dict[str, Any]]:
    yield from client.get_paginator(operation).paginate(**kwargs)


def _name_tag(tags: list[dict[str, str]] | None) -> str:
    for tag in tags or []:
        if tag.get("Key") == "Name":
            return tag.get("Value", "")
    return ""


def dynamodb_tables(client: Any) -> Rows:
    return [[name] for page in _pages(client, "list_tables") for name in page.get("TableNames", [])]


def ec2_instances(client: Any) -> Rows:
    rows: Rows = []
    for page in _pages(client, "describe_instances"):
        for reservation in page.get("Reservations", []):
            for instance in reservation.get("Instances", []):
                rows.append(
                    [
                        instance.get("InstanceId", ""),
                        _name_tag(instance.get("Tags")),
                        instance.get("InstanceType", ""),
                        instance.get("State", {}).get("Name", ""),
                        instance.get("PrivateIpAddress", ""),
                        instance.get("PublicIpAddress", ""),
                    ]
                )
    return rows


def ec2_security_groups(client: Any) -> Rows:
    return [
        [group.get("GroupId", ""), group.get("GroupName", ""), group.get("VpcId", ""), group.get("Description", "")]
        for page in _pages(client, "describe_security_groups")
        for group in page.get("SecurityGroups", [])
    ]


def ec2_key_pairs(client: Any) -> Rows:
    return [
        [pair.get("KeyName", ""), pair.get("KeyPairId", ""), pair.get("KeyType", ""), format_time(pair.get("CreateTime"))]
        for pair in client.describe_key_pairs().get("KeyPairs", [])
    ]


def iam_users(client: Any) -> Rows:
    return [
        [user.get("UserName", ""), user.get("UserId", ""), format_time(user.get("CreateDate")), user.get("Arn", "")]
        for page in _pages(client, "list_users")
        for user in page.get("Users", [])
    ]


def iam_roles(client: Any) -> Rows:
    return [
        [role.get("RoleName", ""), role.get("RoleId", ""), format_time(role.get("CreateDate")), role.get("Description", "")]
        for page in _pages(client, "list_roles")
        for role in page.get("Roles", [])
    ]


def iam_groups(client: Any) -> Rows:
    return [
        [group.get("GroupName", ""), group.get("GroupId", ""), format_time(group.get("CreateDate")), group.get("Arn", "")]
        for page in _pages(client, "list_groups")
        for group in page.get("Groups", [])
    ]


def lambda_functions(client: Any) -> Rows:
    return [
        [
            function.get("FunctionName", ""),
            function.get("Runtime", ""),
            str(function.get("MemorySize", "")),
            str(function.get("Timeout", "")),
            function.get("LastModified", ""),
        ]
        for page in _pages(client, "list_functions")
        for function in page.get("Functions", [])
    ]


def rds_clusters(client: Any) -> Rows:
    return [
        [
            cluster.get("DBClusterIdentifier", ""),
            cluster.get("Engine", ""),
            cluster.get("EngineVersion", ""),
            cluster.get("Status", ""),
            cluster.get("Endpoint", ""),
        ]
        for page in _pages(client, "describe_db_clusters")
        for cluster in page.get("DBClusters", [])
    ]


def rds_instances(client: Any) -> Rows:
    return [
        [
            instance.get("DBInstanceIdentifier", ""),
            instance.get("DBInstanceClass", ""),
            instance.get("Engine", ""),
            instance.get("DBInstanceStatus", ""),
            instance.get("AvailabilityZone", ""),
        ]
        for page in _pages(client, "describe_db_instances")
        for instance in page.get("DBInstances", [])
    ]


def rds_subnet_groups(client: Any) -> Rows:
    return [
        [
            group.get("DBSubnetGroupName", ""),
            group.get("VpcId", ""),
            group.get("SubnetGroupStatus", ""),
            group.get("DBSubnetGroupDescription", ""),
        ]
        for page in _pages(client, "describe_db_subnet_groups")
        for group in page.get("DBSubnetGroups", [])
    ]


def route53_health_checks(client: Any) -> Rows:
    rows: Rows = []
    for page in _pages(client, "list_health_checks"):
        for check in page.get("HealthChecks", []):
            config = check.get("HealthCheckConfig", {})
            rows.append(
                [
                    check.get("Id", ""),
                    config.get("Type", ""),
                    config.get("FullyQualifiedDomainName") or config.get("IPAddress", ""),
                    str(config.get("Port", "")),
                    config.get("ResourcePath", ""),
                ]
            )
    return rows


def sns_topics(client: Any) -> Rows:
    return [
        [last_segment(topic["TopicArn"], ":"), topic["TopicArn"]]
        for page in _pages(client, "list_topics")
        for topic in page.get("Topics", [])
    ]


def sqs_queues(client: Any) -> Rows:
    return [[last_segment(url), url] for page in _pages(client, "list_queues") for url in page.get("QueueUrls", [])]


def secrets(client: Any) -> Rows:
    return [
        [secret.get("Name", ""), secret.get("Description", ""), format_time(secret.get("LastChangedDate"))]
        for page in _pages(client, "list_secrets")
        for secret in page.get("SecretList", [])
    ]


def ssm_parameters(client: Any) -> Rows:
    return [
        [
            parameter.get("Name", ""),
            parameter.get("Type", ""),
            str(parameter.get("Version", "")),
            format_time(parameter.get("LastModifiedDate")),
        ]
        for page in _pages(client, "describe_parameters")
        for parameter in page.get("Parameters", [])
    ]


RESOURCE_LISTINGS: dict[str, Listing] = {
    favorite_ref("DynamoDB", "Tables"): Listing("dynamodb", ("NAME",), dynamodb_tables),
    favorite_ref("EC2", "Instances"): Listing(
        "ec2", ("ID", "NAME", "TYPE", "STATE", "PRIVATE IP", "PUBLIC IP"), ec2_instances
    ),
    favorite_ref("EC2", "Security Groups"): Listing(
        "ec2", ("ID", "NAME", "VPC", "DESCRIPTION"), ec2_security_groups
    ),
    favorite_ref("EC2", "Key Pairs"): Listing("ec2", ("NAME", "ID", "TYPE", "CREATED"), ec2_key_pairs),
    favorite_ref("IAM", "Users"): Listing("iam", ("NAME", "ID", "CREATED", "ARN"), iam_users),
    favorite_ref("IAM", "Roles"): Listing("iam", ("NAME", "ID", "CREATED", "DESCRIPTION"), iam_roles),
    favorite_ref("IAM", "Groups"): Listing("iam", ("NAME", "ID", "CREATED", "ARN"), iam_groups),
    favorite_ref("Lambda", "Functions"): Listing(
        "lambda", ("NAME", "RUNTIME", "MEMORY", "TIMEOUT", "MODIFIED"), lambda_functions
    ),
    favorite_ref("RDS", "Clusters"): Listing("rds", ("ID", "ENGINE", "VERSION", "STATUS", "ENDPOINT"), rds_clusters),
    favorite_ref("RDS", "Instances"): Listing("rds", ("ID", "CLASS", "ENGINE", "STATUS", "ZONE"), rds_instances),
    favorite_ref("RDS", "Subnet Groups"): Listing(
        "rds", ("NAME", "VPC", "STATUS", "DESCRIPTION"), rds_subnet_groups
    ),
    favorite_ref("Route 53", "Health Checks"): Listing(
        "route53", ("ID", "TYPE", "TARGET", "PORT", "PATH"), route53_health_checks
    ),
    favorite_ref("SNS", "Topics"): Listing("sns", ("NAME", "ARN"), sns_topics),
    favorite_ref("SQS", "Queues"): Listing("sqs", ("NAME", "URL"), sqs_queues),
    favorite_ref("Secrets Manager", "Secrets"): Listing("secretsmanager", ("NAME", "DESCRIPTION", "CHANGED"), secrets),
    favorite_ref("Systems Manager", "Parameters"): Listing(
        "ssm", ("NAME", "TYPE", "VERSION", "MODIFIED"), ssm_parameters
    ),
}
