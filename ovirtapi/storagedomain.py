from .fields import Boolean, Field, Integer, List, Nested, Reference
from .resources import OvirtObject
from .types import Action, Storage


class StorageDomain(OvirtObject):
    collection = "storagedomains"
    tag = "storage_domain"

    type = Field()
    status = Field()
    external_status = Field()
    storage = Nested(Storage)
    available = Integer()
    used = Integer()
    committed = Integer()
    master = Boolean()
    host = Reference("Host")
    storage_format = Field()
    wipe_after_delete = Boolean()
    discard_after_delete = Boolean()
    data_centers = List("DataCenter", wrapper="data_center")

    def delete(self, async_=None, host=None, format=None, destroy=None):
        """
        Remove the storage domain.

        The engine needs the host that performs the removal; it defaults to
        the domain's own ``host`` reference when one is set.
        """
        if host is None and self.host is not None:
            host = self.host.name or self.host.id
        elif host is not None and not isinstance(host, str):
            host = host.name or host.id
        params = {"host": host}
        if format is not None:
            params["format"] = "true" if format else "false"
        if destroy is not None:
            params["destroy"] = "true" if destroy else "false"
        return super().delete(async_=async_, **params)

    def refresh_luns(self, async_=None):
        return self.do_action("refreshluns", Action(async_=async_))

    def is_attached(self, host, async_=None):
        """Ask the engine whether the domain is attached to a data center."""
        if isinstance(host, str):
            host = {"name": host}
        reply = self.do_action("isattached", Action(async_=async_, host=host))
        return reply.is_attached

    def update_ovf_store(self, async_=None):
        return self.do_action("updateovfstore", Action(async_=async_))
