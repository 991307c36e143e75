from .fields import Boolean, Field, Integer, Nested, Reference
from .resources import OvirtObject
from .types import Action, Cpu, OperatingSystem, Version


class Host(OvirtObject):
    """
    Hypervisor host managed by the engine.

    ``root_password`` is only used when adding the host and is never
    returned by the engine. ``address`` is also what DNS and placement
    entries carry, which is why they reuse this type.
    """

    collection = "hosts"
    tag = "host"

    address = Field()
    port = Integer()
    status = Field()
    type = Field()
    cluster = Reference("Cluster")
    memory = Integer()
    max_scheduling_memory = Integer()
    cpu = Nested(Cpu)
    os = Nested(OperatingSystem)
    version = Nested(Version)
    root_password = Field()
    override_iptables = Boolean()
    spm = Field()

    def activate(self, async_=None):
        return self.do_action("activate", Action(async_=async_))

    def deactivate(self, async_=None):
        return self.do_action("deactivate", Action(async_=async_))

    def fence(self, fence_type, async_=None):
        """Run a power management operation: start, stop, restart, status or manual."""
        return self.do_action("fence", Action(async_=async_, fence_type=fence_type))

    def install(self, async_=None):
        return self.do_action("install", Action(async_=async_))

    def refresh(self, async_=None):
        return self.do_action("refresh", Action(async_=async_))

    def commit_net_config(self, async_=None):
        return self.do_action("commitnetconfig", Action(async_=async_))
