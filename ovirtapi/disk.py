from .fields import Boolean, Field, Integer, List, Nested, Reference
from .resources import OvirtObject
from .types import Action


class Disk(OvirtObject):
    """Virtual disk image; sizes are in bytes."""

    collection = "disks"
    tag = "disk"

    alias = Field()
    provisioned_size = Integer()
    actual_size = Integer()
    total_size = Integer()
    format = Field()
    status = Field()
    sparse = Boolean()
    shareable = Boolean()
    bootable = Boolean()
    wipe_after_delete = Boolean()
    propagate_errors = Boolean()
    storage_type = Field()
    content_type = Field()
    qcow_version = Field()
    image_id = Field()
    logical_name = Field()
    storage_domains = List("StorageDomain", wrapper="storage_domain")

    def copy(self, storage_domain, disk=None, filter=None, async_=None):
        """Copy the disk to another storage domain, optionally under a new alias."""
        return self.do_action(
            "copy",
            Action(async_=async_, filter=filter, storage_domain=storage_domain, disk=disk),
        )

    def move(self, storage_domain, filter=None, async_=None):
        return self.do_action(
            "move",
            Action(async_=async_, filter=filter, storage_domain=storage_domain),
        )

    def sparsify(self):
        return self.do_action("sparsify")


class DiskAttachment(OvirtObject):
    """
    Connection between a disk and the VM or template using it.

    Lives in the ``diskattachments`` sub-collection of its VM. Saving a new
    attachment whose ``disk`` has no id creates the disk as well.
    """

    tag = "disk_attachment"

    active = Boolean()
    bootable = Boolean()
    interface = Field()
    logical_name = Field()
    pass_discard = Boolean()
    read_only = Boolean()
    uses_scsi_reservation = Boolean()
    disk = Nested(Disk)
    template = Reference("Template")
    vm = Reference("Vm")

    def delete(self, async_=None, detach_only=None):
        """Detach the disk; unless ``detach_only`` is set the engine removes it too."""
        params = {}
        if detach_only is not None:
            params["detach_only"] = "true" if detach_only else "false"
        return super().delete(async_=async_, **params)
