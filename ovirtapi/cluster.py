from .fields import Boolean, Field, Nested, Reference
from .resources import OvirtObject
from .types import Cpu, MemoryPolicy, MigrationOptions, Version


class MacPool(OvirtObject):
    collection = "macpools"
    tag = "mac_pool"

    allow_duplicates = Boolean()
    default_pool = Boolean()


class Cluster(OvirtObject):
    """Group of hosts sharing a CPU type, networks and a data center."""

    collection = "clusters"
    tag = "cluster"

    cpu = Nested(Cpu)
    data_center = Reference("DataCenter")
    version = Nested(Version)
    memory_policy = Nested(MemoryPolicy)
    migration = Nested(MigrationOptions)
    mac_pool = Reference(MacPool)
    ballooning_enabled = Boolean()
    virt_service = Boolean()
    gluster_service = Boolean()
    threads_as_cores = Boolean()
    ha_reservation = Boolean()
    trusted_service = Boolean()
    tunnel_migration = Boolean()
    switch_type = Field()
    firewall_type = Field()
