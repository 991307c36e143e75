from .cluster import Cluster
from .fields import Boolean, Field, List, Nested, Reference
from .network import Network
from .resources import OvirtObject
from .storagedomain import StorageDomain
from .types import Action, Version


class DataCenter(OvirtObject):
    """
    Logical grouping of clusters, storage domains and networks.

    ``local`` selects a local-storage data center (one host, no shared
    storage) instead of a shared one.
    """

    collection = "datacenters"
    tag = "data_center"

    local = Boolean()
    status = Field()
    storage_format = Field()
    quota_mode = Field()
    version = Nested(Version)
    supported_versions = List(Version, wrapper="version")
    mac_pool = Reference("MacPool")

    def clusters(self):
        return self.get_linked("clusters", Cluster)

    def storage_domains(self):
        return self.get_linked("storagedomains", StorageDomain)

    def networks(self):
        return self.get_linked("networks", Network)

    def clean_finished_tasks(self, async_=None):
        """Clean all finished tasks of the data center."""
        return self.do_action("cleanfinishedtasks", Action(async_=async_))
