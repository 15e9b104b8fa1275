"""
cloud_inventory/drivers/oci/services.py - OCI service collectors

Each collector is ``(driver, ctx) -> Iterator[NormalizedResource]`` and lists
the driver's compartment. SDK models are converted with ``oci.util.to_dict``
so configuration keys are snake_case. Freeform and defined tags are merged,
defined tags as ``namespace.key``.

Resource types are ``oci.<service>.<kind>``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from enum import Enum
from typing import TYPE_CHECKING, Any

import oci

from ...discovery.isolation import CollectionContext
from ...discovery.normalize import TagModel, extract_tags
from ...types import NormalizedResource

if TYPE_CHECKING:
    from .driver import OciInventoryDriver


class OciService(Enum):
    """Known OCI services, in default collection order"""

    COMPUTE = "compute"
    KUBERNETES = "kubernetes"
    DATABASE = "database"
    BLOCKSTORAGE = "blockstorage"
    OBJECTSTORAGE = "objectstorage"
    FILESTORAGE = "filestorage"
    VCN = "vcn"
    LOADBALANCER = "loadbalancer"
    IDENTITY = "identity"
    DNS = "dns"


OCI_SENSITIVE_FIELDS = frozenset(
    {
        "password",
        "admin_password",
        "private_key",
        "public_key",
        "secret",
        "token",
        "connection_string",
        "connection_strings",
    }
)


# =============================================================================
# Helpers
# =============================================================================


def paginate(list_call: Callable[..., Any], *args: Any, **kwargs: Any) -> Iterator[Any]:
    """Every record of a paginated OCI list call"""
    return oci.pagination.list_call_get_all_results_generator(list_call, "record", *args, **kwargs)


def as_dict(model: Any) -> dict[str, Any]:
    data = oci.util.to_dict(model)
    return data if isinstance(data, dict) else {"value": data}


def _tags(item: dict[str, Any]) -> dict[str, str | None]:
    return extract_tags(TagModel.FREEFORM_DEFINED, item.get("freeform_tags"), item.get("defined_tags"))


def _simple(
    driver: OciInventoryDriver,
    ctx: CollectionContext,
    resource_type: str,
    records: Iterator[Any],
    region: str | None,
    name_key: str = "display_name",
) -> Iterator[NormalizedResource]:
    """One resource per record, id from ``id`` and name from ``name_key``"""
    for record in records:
        item = as_dict(record)
        resource = driver.resource(
            ctx.service,
            resource_type,
            item,
            item.get("id"),
            region=region,
            name=item.get(name_key) or item.get("id"),
            tags=_tags(item),
        )
        if resource is not None:
            yield resource


# =============================================================================
# Collectors
# =============================================================================


def collect_compute(driver: OciInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    def in_region(region: str) -> Iterator[NormalizedResource]:
        compute = driver.client("compute", region)
        records = paginate(compute.list_instances, compartment_id=driver.compartment_id)
        yield from _simple(driver, ctx, "oci.compute.instance", records, region)

    yield from ctx.each_region(in_region)


def collect_kubernetes(driver: OciInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    """OKE clusters, each followed by its node pools

    Node pools carry ``metadata = {"cluster_id": ..., "cluster_name": ...}``.
    """

    def node_pools_of(region: str, engine: Any, cluster_id: str, cluster_name: str | None) -> Iterator[NormalizedResource]:
        records = paginate(engine.list_node_pools, compartment_id=driver.compartment_id, cluster_id=cluster_id)
        for record in records:
            item = as_dict(record)
            resource = driver.resource(
                ctx.service,
                "oci.kubernetes.nodepool",
                item,
                item.get("id"),
                region=region,
                name=item.get("name"),
                tags=_tags(item),
                metadata={"cluster_id": cluster_id, "cluster_name": cluster_name},
            )
            if resource is not None:
                yield resource

    def in_region(region: str) -> Iterator[NormalizedResource]:
        engine = driver.client("containerengine", region)
        for record in paginate(engine.list_clusters, compartment_id=driver.compartment_id):
            item = as_dict(record)
            parent = driver.resource(
                ctx.service,
                "oci.kubernetes.cluster",
                item,
                item.get("id"),
                region=region,
                name=item.get("name"),
                tags=_tags(item),
            )
            if parent is None:
                continue
            yield parent
            yield from ctx.children(
                parent.resource_id,
                "node_pools",
                lambda: node_pools_of(region, engine, parent.resource_id, item.get("name")),
                region=region,
            )

    yield from ctx.each_region(in_region)


def collect_database(driver: OciInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    """Autonomous databases and DB systems"""

    def in_region(region: str) -> Iterator[NormalizedResource]:
        database = driver.client("database", region)
        yield from _simple(
            driver,
            ctx,
            "oci.database.autonomous",
            paginate(database.list_autonomous_databases, compartment_id=driver.compartment_id),
            region,
        )
        yield from _simple(
            driver,
            ctx,
            "oci.database.system",
            paginate(database.list_db_systems, compartment_id=driver.compartment_id),
            region,
        )

    yield from ctx.each_region(in_region)


def collect_blockstorage(driver: OciInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    def in_region(region: str) -> Iterator[NormalizedResource]:
        blockstorage = driver.client("blockstorage", region)
        records = paginate(blockstorage.list_volumes, compartment_id=driver.compartment_id)
        yield from _simple(driver, ctx, "oci.blockstorage.volume", records, region)

    yield from ctx.each_region(in_region)


def collect_objectstorage(driver: OciInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    """Buckets of the tenancy namespace; ``metadata = {"namespace": ...}``"""
    namespace: str | None = None

    def in_region(region: str) -> Iterator[NormalizedResource]:
        nonlocal namespace
        storage = driver.client("objectstorage", region)
        if namespace is None:
            namespace = storage.get_namespace().data

        records = paginate(
            storage.list_buckets,
            namespace_name=namespace,
            compartment_id=driver.compartment_id,
            fields=["tags"],
        )
        for record in records:
            item = as_dict(record)
            bucket_name = item.get("name")
            resource = driver.resource(
                ctx.service,
                "oci.objectstorage.bucket",
                item,
                item.get("id") or (f"{namespace}/{bucket_name}" if bucket_name else None),
                region=region,
                name=bucket_name,
                tags=_tags(item),
                metadata={"namespace": namespace},
            )
            if resource is not None:
                yield resource

    yield from ctx.each_region(in_region)


def collect_filestorage(driver: OciInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    """File systems, listed per availability domain"""

    def in_region(region: str) -> Iterator[NormalizedResource]:
        identity = driver.client("identity", region)
        filestorage = driver.client("filestorage", region)
        domains = identity.list_availability_domains(compartment_id=driver.tenancy_id).data
        for domain in domains:
            records = paginate(
                filestorage.list_file_systems,
                compartment_id=driver.compartment_id,
                availability_domain=domain.name,
            )
            yield from _simple(driver, ctx, "oci.filestorage.filesystem", records, region)

    yield from ctx.each_region(in_region)


def collect_vcn(driver: OciInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    """VCNs, each followed by its subnets

    Subnets carry ``metadata = {"vcn_id": ..., "vcn_name": ...}``.
    """

    def subnets_of(region: str, network: Any, vcn_id: str, vcn_name: str | None) -> Iterator[NormalizedResource]:
        records = paginate(network.list_subnets, compartment_id=driver.compartment_id, vcn_id=vcn_id)
        for record in records:
            item = as_dict(record)
            resource = driver.resource(
                ctx.service,
                "oci.vcn.subnet",
                item,
                item.get("id"),
                region=region,
                name=item.get("display_name") or item.get("id"),
                tags=_tags(item),
                metadata={"vcn_id": vcn_id, "vcn_name": vcn_name},
            )
            if resource is not None:
                yield resource

    def in_region(region: str) -> Iterator[NormalizedResource]:
        network = driver.client("network", region)
        for record in paginate(network.list_vcns, compartment_id=driver.compartment_id):
            item = as_dict(record)
            parent = driver.resource(
                ctx.service,
                "oci.vcn.network",
                item,
                item.get("id"),
                region=region,
                name=item.get("display_name") or item.get("id"),
                tags=_tags(item),
            )
            if parent is None:
                continue
            yield parent
            yield from ctx.children(
                parent.resource_id,
                "subnets",
                lambda: subnets_of(region, network, parent.resource_id, item.get("display_name")),
                region=region,
            )

    yield from ctx.each_region(in_region)


def collect_loadbalancer(driver: OciInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    def in_region(region: str) -> Iterator[NormalizedResource]:
        lb = driver.client("loadbalancer", region)
        records = paginate(lb.list_load_balancers, compartment_id=driver.compartment_id)
        yield from _simple(driver, ctx, "oci.loadbalancer.load-balancer", records, region)

    yield from ctx.each_region(in_region)


def collect_identity(driver: OciInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    """Users, groups and compartments of the tenancy (global, region None)"""
    identity = driver.client("identity")
    tenancy_id = driver.tenancy_id

    yield from _simple(driver, ctx, "oci.identity.user", paginate(identity.list_users, tenancy_id), None, "name")
    yield from _simple(driver, ctx, "oci.identity.group", paginate(identity.list_groups, tenancy_id), None, "name")
    yield from _simple(
        driver,
        ctx,
        "oci.identity.compartment",
        paginate(identity.list_compartments, tenancy_id, compartment_id_in_subtree=True),
        None,
        "name",
    )


def collect_dns(driver: OciInventoryDriver, ctx: CollectionContext) -> Iterator[NormalizedResource]:
    dns = driver.client("dns")
    records = paginate(dns.list_zones, compartment_id=driver.compartment_id)
    yield from _simple(driver, ctx, "oci.dns.zone", records, None, "name")


SERVICE_COLLECTORS = {
    OciService.COMPUTE: collect_compute,
    OciService.KUBERNETES: collect_kubernetes,
    OciService.DATABASE: collect_database,
    OciService.BLOCKSTORAGE: collect_blockstorage,
    OciService.OBJECTSTORAGE: collect_objectstorage,
    OciService.FILESTORAGE: collect_filestorage,
    OciService.VCN: collect_vcn,
    OciService.LOADBALANCER: collect_loadbalancer,
    OciService.IDENTITY: collect_identity,
    OciService.DNS: collect_dns,
}
