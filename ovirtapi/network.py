from .fields import Boolean, Field, Integer, List, Nested, Reference
from .resources import OvirtObject
from .types import Action, Mac, PassThrough, Vlan


class Network(OvirtObject):
    """Logical network of a data center; ``usages`` holds roles such as "vm"."""

    collection = "networks"
    tag = "network"

    data_center = Reference("DataCenter")
    vlan = Nested(Vlan)
    mtu = Integer()
    stp = Boolean()
    required = Boolean()
    status = Field()
    usages = List(wrapper="usage")
    port_isolation = Boolean()


class VnicProfile(OvirtObject):
    collection = "vnicprofiles"
    tag = "vnic_profile"

    network = Reference(Network)
    port_mirroring = Boolean()
    migratable = Boolean()
    pass_through = Nested(PassThrough)


class Nic(OvirtObject):
    """
    Virtual network interface of a VM.

    NICs live in the ``nics`` sub-collection of their VM; create them with
    ``Vm.new_nic()`` so that ``save()`` posts to the right place.
    """

    tag = "nic"

    boot_protocol = Field()
    interface = Field()
    linked = Boolean()
    mac = Nested(Mac)
    on_boot = Boolean()
    plugged = Boolean()
    vnic_profile = Reference(VnicProfile)
    vm = Reference("Vm")

    def activate(self, async_=None):
        return self.do_action("activate", Action(async_=async_))

    def deactivate(self, async_=None):
        return self.do_action("deactivate", Action(async_=async_))
