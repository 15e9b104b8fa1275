"""
cloud_inventory/drivers/aws/services.py - AWS service collectors

Each collector is ``(driver, ctx) -> Iterator[NormalizedResource]``.
Regional collectors visit ``ctx.regions`` through ``ctx.each_region`` so a
failing region is reported and skipped. Tag lookups that need an extra call
go through ``ctx.lookup`` and fall back to empty tags.

Resource types are ``aws.<service>.<kind>``.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import TYPE_CHECKING, Any

from ...config import AWS_GLOBAL_REGION
from ...discovery.isolation import CollectionContext
from ...discovery.normalize import TagModel, extract_tags, pick_first
from ...parallel.errors import ErrorSeverity
from ...types import NormalizedResource

if TYPE_CHECKING:
    from .driver import AwsInventoryDriver


class AwsService(Enum):
    """Known AWS services, in default collection order"""

    EC2 = "ec2"
    EBS = "ebs"
    VPC = "vpc"
    ELB = "elb"
    S3 = "s3"
    RDS = "rds"
    IAM = "iam"
    LAMBDA = "lambda"
    DYNAMODB = "dynamodb"
    SQS = "sqs"
    SNS = "sns"
    EKS = "eks"
    KMS = "kms"
    SECRETSMANAGER = "secretsmanager"
    ECR = "ecr"
    LOGS = "logs"
    CLOUDFRONT = "cloudfront"
    ROUTE53 = "route53"


# Top-level configuration fields never emitted in clear text
AWS_SENSITIVE_FIELDS = frozenset(
    {
        "MasterUserPassword",
        "Password",
        "SecretString",
        "SecretBinary",
        "PrivateKey",
        "KeyMaterial",
        "Certificate",
        "CertificateChain",
        "SessionToken",
        "AuthToken",
        "ConnectionString",
    }
)


# =============================================================================
# Helpers
# =============================================================================


def _paginate(client: Any, operation: str, result_key: str, **kwargs: Any) -> Iterator[Any]:
    for page in client.get_paginator(operation).paginate(**kwargs):
        yield from page.get(result_key, [])


def _pair_tags(raw: dict[str, Any], key: str = "Tags") -> dict[str, str | None]:
    return extract_tags(TagModel.PAIRS, raw.get(key))


def _emit(resource: NormalizedResource | None) -> Iterator[NormalizedResource]:
    if resource is not None:
        yield resource


# =============================================================================
# Compute / storage / network
# =============================================================================


def collect_ec2(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    """EC2 instances in every configured region"""

    def in_region(region: str) -> Iterator[NormalizedResource]:
        ec2 = driver.client("ec2", region)
        for reservation in _paginate(ec2, "describe_instances", "Reservations"):
            for instance in reservation.get("Instances", []):
                tags = _pair_tags(instance)
                yield from _emit(
                    driver.resource(
                        ctx.service,
                        "aws.ec2.instance",
                        instance,
                        instance.get("InstanceId"),
                        region=region,
                        name=tags.get("Name"),
                        tags=tags,
                    )
                )

    yield from ctx.each_region(in_region)


def collect_ebs(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    """EBS volumes and account-owned snapshots"""

    def in_region(region: str) -> Iterator[NormalizedResource]:
        ec2 = driver.client("ec2", region)
        for volume in _paginate(ec2, "describe_volumes", "Volumes"):
            tags = _pair_tags(volume)
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.ebs.volume",
                    volume,
                    volume.get("VolumeId"),
                    region=region,
                    name=tags.get("Name"),
                    tags=tags,
                )
            )
        for snapshot in _paginate(ec2, "describe_snapshots", "Snapshots", OwnerIds=["self"]):
            tags = _pair_tags(snapshot)
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.ebs.snapshot",
                    snapshot,
                    snapshot.get("SnapshotId"),
                    region=region,
                    name=tags.get("Name"),
                    tags=tags,
                )
            )

    yield from ctx.each_region(in_region)


def collect_vpc(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    """VPCs with their subnets, then security groups, route tables and gateways

    Subnets are listed per VPC right after it and carry
    ``metadata = {"vpc_id": ..., "vpc_name": ...}``.
    """

    def subnets_of(region: str, ec2: Any, vpc_id: str, vpc_name: str | None) -> Iterator[NormalizedResource]:
        filters = [{"Name": "vpc-id", "Values": [vpc_id]}]
        for subnet in _paginate(ec2, "describe_subnets", "Subnets", Filters=filters):
            tags = _pair_tags(subnet)
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.vpc.subnet",
                    subnet,
                    subnet.get("SubnetId"),
                    region=region,
                    name=tags.get("Name") or subnet.get("SubnetId"),
                    tags=tags,
                    metadata={"vpc_id": vpc_id, "vpc_name": vpc_name},
                )
            )

    def in_region(region: str) -> Iterator[NormalizedResource]:
        ec2 = driver.client("ec2", region)

        for vpc in _paginate(ec2, "describe_vpcs", "Vpcs"):
            tags = _pair_tags(vpc)
            parent = driver.resource(
                ctx.service,
                "aws.vpc.vpc",
                vpc,
                vpc.get("VpcId"),
                region=region,
                name=tags.get("Name") or vpc.get("VpcId"),
                tags=tags,
            )
            if parent is None:
                continue
            yield parent
            yield from ctx.children(
                parent.resource_id,
                "subnets",
                lambda: subnets_of(region, ec2, parent.resource_id, tags.get("Name")),
                region=region,
            )

        for group in _paginate(ec2, "describe_security_groups", "SecurityGroups"):
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.vpc.security-group",
                    group,
                    group.get("GroupId"),
                    region=region,
                    name=group.get("GroupName"),
                    tags=_pair_tags(group),
                )
            )

        for table in _paginate(ec2, "describe_route_tables", "RouteTables"):
            tags = _pair_tags(table)
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.vpc.route-table",
                    table,
                    table.get("RouteTableId"),
                    region=region,
                    name=tags.get("Name"),
                    tags=tags,
                )
            )

        for gateway in _paginate(ec2, "describe_internet_gateways", "InternetGateways"):
            tags = _pair_tags(gateway)
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.vpc.internet-gateway",
                    gateway,
                    gateway.get("InternetGatewayId"),
                    region=region,
                    name=tags.get("Name"),
                    tags=tags,
                )
            )

        for gateway in _paginate(ec2, "describe_nat_gateways", "NatGateways"):
            tags = _pair_tags(gateway)
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.vpc.nat-gateway",
                    gateway,
                    gateway.get("NatGatewayId"),
                    region=region,
                    name=tags.get("Name"),
                    tags=tags,
                )
            )

    yield from ctx.each_region(in_region)


def collect_elb(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    """Application/network load balancers, target groups and classic load balancers"""

    def v2_tags(elbv2: Any, arn: str, region: str) -> dict[str, str | None]:
        descriptions = ctx.lookup(
            lambda: elbv2.describe_tags(ResourceArns=[arn]).get("TagDescriptions", []),
            [],
            "describe_tags",
            region=region,
            resource_id=arn,
        )
        return _pair_tags(descriptions[0]) if descriptions else {}

    def in_region(region: str) -> Iterator[NormalizedResource]:
        elbv2 = driver.client("elbv2", region)
        for lb in _paginate(elbv2, "describe_load_balancers", "LoadBalancers"):
            arn = lb.get("LoadBalancerArn")
            kind = (lb.get("Type") or "application").lower()
            yield from _emit(
                driver.resource(
                    ctx.service,
                    f"aws.elb.{kind}-load-balancer",
                    lb,
                    arn,
                    region=region,
                    name=lb.get("LoadBalancerName"),
                    tags=v2_tags(elbv2, arn, region) if arn else {},
                )
            )

        for group in _paginate(elbv2, "describe_target_groups", "TargetGroups"):
            arn = group.get("TargetGroupArn")
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.elb.target-group",
                    group,
                    arn,
                    region=region,
                    name=group.get("TargetGroupName"),
                    tags=v2_tags(elbv2, arn, region) if arn else {},
                )
            )

        elb = driver.client("elb", region)
        for lb in _paginate(elb, "describe_load_balancers", "LoadBalancerDescriptions"):
            lb_name = lb.get("LoadBalancerName")
            descriptions = ctx.lookup(
                lambda: elb.describe_tags(LoadBalancerNames=[lb_name]).get("TagDescriptions", []),
                [],
                "describe_tags",
                region=region,
                resource_id=lb_name,
            )
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.elb.classic-load-balancer",
                    lb,
                    lb_name,
                    region=region,
                    name=lb_name,
                    tags=_pair_tags(descriptions[0]) if descriptions else {},
                )
            )

    yield from ctx.each_region(in_region)


def collect_s3(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    """S3 buckets (global listing, bucket region resolved per bucket)"""
    s3 = driver.client("s3")

    for page in s3.get_paginator("list_buckets").paginate():
        owner = page.get("Owner")
        for bucket in page.get("Buckets", []):
            yield from _bucket(driver, ctx, s3, bucket, owner)


def _bucket(
    driver: AwsInventoryDriver,
    ctx: CollectionContext,
    s3: Any,
    bucket: dict[str, Any],
    owner: dict[str, Any] | None,
) -> Iterator[NormalizedResource]:
    bucket_name = bucket.get("Name")
    if not bucket_name:
        return

    location = ctx.lookup(
        lambda: s3.get_bucket_location(Bucket=bucket_name).get("LocationConstraint"),
        None,
        "get_bucket_location",
        resource_id=bucket_name,
    )
    region = location or AWS_GLOBAL_REGION
    tag_set = ctx.lookup(
        lambda: s3.get_bucket_tagging(Bucket=bucket_name).get("TagSet", []),
        [],
        "get_bucket_tagging",
        region=region,
        resource_id=bucket_name,
    )

    yield from _emit(
        driver.resource(
            ctx.service,
            "aws.s3.bucket",
            {**bucket, "Region": region, "Owner": owner},
            bucket_name,
            region=region,
            name=bucket_name,
            tags=extract_tags(TagModel.PAIRS, tag_set),
        )
    )


def collect_rds(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    def in_region(region: str) -> Iterator[NormalizedResource]:
        rds = driver.client("rds", region)
        for instance in _paginate(rds, "describe_db_instances", "DBInstances"):
            arn = instance.get("DBInstanceArn")
            tags = instance.get("TagList")
            if tags is None and arn:
                tags = ctx.lookup(
                    lambda: rds.list_tags_for_resource(ResourceName=arn).get("TagList", []),
                    [],
                    "list_tags_for_resource",
                    region=region,
                    resource_id=arn,
                )
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.rds.instance",
                    instance,
                    pick_first(instance, "DbiResourceId", "DBInstanceIdentifier"),
                    region=region,
                    name=instance.get("DBInstanceIdentifier"),
                    tags=extract_tags(TagModel.PAIRS, tags),
                )
            )

    yield from ctx.each_region(in_region)


def collect_iam(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    """IAM users and roles (global, region None)"""
    iam = driver.client("iam")

    for user in _paginate(iam, "list_users", "Users"):
        user_name = user.get("UserName")
        tags = ctx.lookup(
            lambda: iam.list_user_tags(UserName=user_name).get("Tags", []),
            [],
            "list_user_tags",
            resource_id=user_name,
        )
        yield from _emit(
            driver.resource(
                ctx.service,
                "aws.iam.user",
                user,
                pick_first(user, "Arn", "UserId"),
                name=user_name,
                tags=extract_tags(TagModel.PAIRS, tags),
            )
        )

    for role in _paginate(iam, "list_roles", "Roles"):
        role_name = role.get("RoleName")
        tags = ctx.lookup(
            lambda: iam.list_role_tags(RoleName=role_name).get("Tags", []),
            [],
            "list_role_tags",
            resource_id=role_name,
        )
        yield from _emit(
            driver.resource(
                ctx.service,
                "aws.iam.role",
                role,
                pick_first(role, "Arn", "RoleId"),
                name=role_name,
                tags=extract_tags(TagModel.PAIRS, tags),
            )
        )


# =============================================================================
# Application services
# =============================================================================


def collect_lambda(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    def in_region(region: str) -> Iterator[NormalizedResource]:
        client = driver.client("lambda", region)
        for function in _paginate(client, "list_functions", "Functions"):
            arn = function.get("FunctionArn")
            tags = ctx.lookup(
                lambda: client.list_tags(Resource=arn).get("Tags", {}),
                {},
                "list_tags",
                region=region,
                resource_id=arn,
            )
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.lambda.function",
                    function,
                    arn,
                    region=region,
                    name=function.get("FunctionName"),
                    tags=extract_tags(TagModel.MAPPING, tags),
                )
            )

    yield from ctx.each_region(in_region)


def collect_dynamodb(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    def in_region(region: str) -> Iterator[NormalizedResource]:
        client = driver.client("dynamodb", region)
        for table_name in _paginate(client, "list_tables", "TableNames"):
            table = ctx.lookup(
                lambda: client.describe_table(TableName=table_name).get("Table", {}),
                None,
                "describe_table",
                region=region,
                resource_id=table_name,
                severity=ErrorSeverity.WARNING,
            )
            if table is None:
                continue
            arn = table.get("TableArn")
            tags = ctx.lookup(
                lambda: client.list_tags_of_resource(ResourceArn=arn).get("Tags", []),
                [],
                "list_tags_of_resource",
                region=region,
                resource_id=arn,
            )
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.dynamodb.table",
                    table,
                    arn or table_name,
                    region=region,
                    name=table_name,
                    tags=extract_tags(TagModel.PAIRS, tags),
                )
            )

    yield from ctx.each_region(in_region)


def collect_sqs(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    def in_region(region: str) -> Iterator[NormalizedResource]:
        client = driver.client("sqs", region)
        for queue_url in _paginate(client, "list_queues", "QueueUrls"):
            attributes = ctx.lookup(
                lambda: client.get_queue_attributes(QueueUrl=queue_url, AttributeNames=["All"]).get("Attributes", {}),
                {},
                "get_queue_attributes",
                region=region,
                resource_id=queue_url,
            )
            tags = ctx.lookup(
                lambda: client.list_queue_tags(QueueUrl=queue_url).get("Tags", {}),
                {},
                "list_queue_tags",
                region=region,
                resource_id=queue_url,
            )
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.sqs.queue",
                    {"QueueUrl": queue_url, **attributes},
                    attributes.get("QueueArn") or queue_url,
                    region=region,
                    name=queue_url.rstrip("/").rsplit("/", 1)[-1],
                    tags=extract_tags(TagModel.MAPPING, tags),
                )
            )

    yield from ctx.each_region(in_region)


def collect_sns(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    def in_region(region: str) -> Iterator[NormalizedResource]:
        client = driver.client("sns", region)
        for topic in _paginate(client, "list_topics", "Topics"):
            arn = topic.get("TopicArn")
            if not arn:
                continue
            attributes = ctx.lookup(
                lambda: client.get_topic_attributes(TopicArn=arn).get("Attributes", {}),
                {},
                "get_topic_attributes",
                region=region,
                resource_id=arn,
            )
            tags = ctx.lookup(
                lambda: client.list_tags_for_resource(ResourceArn=arn).get("Tags", []),
                [],
                "list_tags_for_resource",
                region=region,
                resource_id=arn,
            )
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.sns.topic",
                    {"TopicArn": arn, **attributes},
                    arn,
                    region=region,
                    name=arn.rsplit(":", 1)[-1],
                    tags=extract_tags(TagModel.PAIRS, tags),
                )
            )

    yield from ctx.each_region(in_region)


def collect_eks(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    """EKS clusters, each followed by its managed node groups

    Node groups carry ``metadata = {"cluster_id": ..., "cluster_name": ...}``.
    """

    def nodegroups_of(region: str, eks: Any, cluster_id: str, cluster_name: str) -> Iterator[NormalizedResource]:
        for nodegroup_name in _paginate(eks, "list_nodegroups", "nodegroups", clusterName=cluster_name):
            nodegroup = ctx.lookup(
                lambda: eks.describe_nodegroup(clusterName=cluster_name, nodegroupName=nodegroup_name).get(
                    "nodegroup", {}
                ),
                None,
                "describe_nodegroup",
                region=region,
                resource_id=f"{cluster_name}/{nodegroup_name}",
                severity=ErrorSeverity.WARNING,
            )
            if nodegroup is None:
                continue
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.eks.nodegroup",
                    nodegroup,
                    pick_first(nodegroup, "nodegroupArn") or f"{cluster_name}/{nodegroup_name}",
                    region=region,
                    name=nodegroup_name,
                    tags=extract_tags(TagModel.MAPPING, nodegroup.get("tags")),
                    metadata={"cluster_id": cluster_id, "cluster_name": cluster_name},
                )
            )

    def in_region(region: str) -> Iterator[NormalizedResource]:
        eks = driver.client("eks", region)
        for cluster_name in _paginate(eks, "list_clusters", "clusters"):
            cluster = ctx.lookup(
                lambda: eks.describe_cluster(name=cluster_name).get("cluster", {}),
                None,
                "describe_cluster",
                region=region,
                resource_id=cluster_name,
                severity=ErrorSeverity.WARNING,
            )
            if cluster is None:
                continue
            parent = driver.resource(
                ctx.service,
                "aws.eks.cluster",
                cluster,
                pick_first(cluster, "arn") or cluster_name,
                region=region,
                name=cluster_name,
                tags=extract_tags(TagModel.MAPPING, cluster.get("tags")),
            )
            if parent is None:
                continue
            yield parent
            yield from ctx.children(
                parent.resource_id,
                "nodegroups",
                lambda: nodegroups_of(region, eks, parent.resource_id, cluster_name),
                region=region,
            )

    yield from ctx.each_region(in_region)


# =============================================================================
# Security / management
# =============================================================================


def collect_kms(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    def in_region(region: str) -> Iterator[NormalizedResource]:
        kms = driver.client("kms", region)
        for key in _paginate(kms, "list_keys", "Keys"):
            key_id = key.get("KeyId")
            metadata = ctx.lookup(
                lambda: kms.describe_key(KeyId=key_id).get("KeyMetadata", {}),
                {},
                "describe_key",
                region=region,
                resource_id=key_id,
            )
            tags = ctx.lookup(
                lambda: kms.list_resource_tags(KeyId=key_id).get("Tags", []),
                [],
                "list_resource_tags",
                region=region,
                resource_id=key_id,
            )
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.kms.key",
                    {**key, **metadata},
                    key_id,
                    region=region,
                    name=metadata.get("Description") or key_id,
                    tags=extract_tags(TagModel.PAIRS, tags, key_field="TagKey", value_field="TagValue"),
                )
            )

    yield from ctx.each_region(in_region)


def collect_secretsmanager(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    """Secrets metadata only, never secret values"""

    def in_region(region: str) -> Iterator[NormalizedResource]:
        client = driver.client("secretsmanager", region)
        for secret in _paginate(client, "list_secrets", "SecretList"):
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.secretsmanager.secret",
                    secret,
                    pick_first(secret, "ARN", "Name"),
                    region=region,
                    name=secret.get("Name"),
                    tags=_pair_tags(secret),
                )
            )

    yield from ctx.each_region(in_region)


def collect_ecr(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    def in_region(region: str) -> Iterator[NormalizedResource]:
        ecr = driver.client("ecr", region)
        for repository in _paginate(ecr, "describe_repositories", "repositories"):
            arn = repository.get("repositoryArn")
            tags = ctx.lookup(
                lambda: ecr.list_tags_for_resource(resourceArn=arn).get("tags", []),
                [],
                "list_tags_for_resource",
                region=region,
                resource_id=arn,
            )
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.ecr.repository",
                    repository,
                    arn,
                    region=region,
                    name=repository.get("repositoryName"),
                    tags=extract_tags(TagModel.PAIRS, tags),
                )
            )

    yield from ctx.each_region(in_region)


def collect_logs(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    def in_region(region: str) -> Iterator[NormalizedResource]:
        logs = driver.client("logs", region)
        for group in _paginate(logs, "describe_log_groups", "logGroups"):
            group_name = group.get("logGroupName")
            tags = ctx.lookup(
                lambda: logs.list_tags_log_group(logGroupName=group_name).get("tags", {}),
                {},
                "list_tags_log_group",
                region=region,
                resource_id=group_name,
            )
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.logs.group",
                    group,
                    pick_first(group, "logGroupArn", "arn", "logGroupName"),
                    region=region,
                    name=group_name,
                    tags=extract_tags(TagModel.MAPPING, tags),
                )
            )

    yield from ctx.each_region(in_region)


# =============================================================================
# Global edge services
# =============================================================================


def collect_cloudfront(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    cloudfront = driver.client("cloudfront")
    for page in cloudfront.get_paginator("list_distributions").paginate():
        for distribution in page.get("DistributionList", {}).get("Items", []):
            arn = distribution.get("ARN")
            tags = ctx.lookup(
                lambda: cloudfront.list_tags_for_resource(Resource=arn).get("Tags", {}).get("Items", []),
                [],
                "list_tags_for_resource",
                resource_id=arn,
            )
            yield from _emit(
                driver.resource(
                    ctx.service,
                    "aws.cloudfront.distribution",
                    distribution,
                    pick_first(distribution, "Id", "ARN"),
                    name=distribution.get("DomainName"),
                    tags=extract_tags(TagModel.PAIRS, tags),
                )
            )


def collect_route53(driver: AwsInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    route53 = driver.client("route53")
    for zone in _paginate(route53, "list_hosted_zones", "HostedZones"):
        zone_id = (zone.get("Id") or "").rsplit("/", 1)[-1]
        tags = ctx.lookup(
            lambda: route53.list_tags_for_resource(ResourceType="hostedzone", ResourceId=zone_id)
            .get("ResourceTagSet", {})
            .get("Tags", []),
            [],
            "list_tags_for_resource",
            resource_id=zone_id,
        )
        yield from _emit(
            driver.resource(
                ctx.service,
                "aws.route53.hosted-zone",
                zone,
                zone_id,
                name=zone.get("Name"),
                tags=extract_tags(TagModel.PAIRS, tags),
            )
        )


SERVICE_COLLECTORS = {
    AwsService.EC2: collect_ec2,
    AwsService.EBS: collect_ebs,
    AwsService.VPC: collect_vpc,
    AwsService.ELB: collect_elb,
    AwsService.S3: collect_s3,
    AwsService.RDS: collect_rds,
    AwsService.IAM: collect_iam,
    AwsService.LAMBDA: collect_lambda,
    AwsService.DYNAMODB: collect_dynamodb,
    AwsService.SQS: collect_sqs,
    AwsService.SNS: collect_sns,
    AwsService.EKS: collect_eks,
    AwsService.KMS: collect_kms,
    AwsService.SECRETSMANAGER: collect_secretsmanager,
    AwsService.ECR: collect_ecr,
    AwsService.LOGS: collect_logs,
    AwsService.CLOUDFRONT: collect_cloudfront,
    AwsService.ROUTE53: collect_route53,
}
