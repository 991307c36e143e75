from .disk import DiskAttachment
from .fields import Boolean, Field, Integer, List, Nested, Reference
from .network import Nic
from .resources import Collection, OvirtObject
from .types import (
    Action,
    Bios,
    Console,
    Cpu,
    CustomProperty,
    Display,
    GuestOperatingSystem,
    HighAvailability,
    Initialization,
    Io,
    Link,
    MemoryPolicy,
    MigrationOptions,
    OperatingSystem,
    TimeZone,
    Usb,
    Version,
    VmPlacementPolicy,
)


class Vm(OvirtObject):
    """Virtual machine."""

    collection = "vms"
    tag = "vm"

    bios = Nested(Bios)
    console = Nested(Console)
    cpu = Nested(Cpu)
    cpu_shares = Integer()
    creation_time = Integer(string=False)
    custom_compatibility_version = Nested(Version)
    custom_cpu_model = Field()
    custom_emulated_machine = Field()
    custom_properties = List(CustomProperty, wrapper="custom_property")
    delete_protected = Boolean()
    display = Nested(Display)
    fqdn = Field()
    guest_operating_system = Nested(GuestOperatingSystem)
    high_availability = Nested(HighAvailability)
    initialization = Nested(Initialization)
    io = Nested(Io)
    large_icon = Nested(Link)
    memory = Integer()
    memory_policy = Nested(MemoryPolicy)
    migration = Nested(MigrationOptions)
    migration_downtime = Integer()
    origin = Field()
    os = Nested(OperatingSystem)
    small_icon = Nested(Link)
    start_paused = Boolean()
    stateless = Boolean()
    time_zone = Nested(TimeZone)
    type = Field()
    usb = Nested(Usb)
    cluster = Reference("Cluster")
    cpu_profile = Nested(Link)
    quota = Nested(Link)
    next_run_configuration_exists = Boolean()
    numa_tune_mode = Field()
    placement_policy = Nested(VmPlacementPolicy)
    run_once = Boolean()
    start_time = Integer(string=False)
    stop_time = Integer(string=False)
    status = Field()
    host = Reference("Host")
    instance_type = Nested(Link)
    original_template = Reference("Template")
    template = Reference("Template")

    def _sub_collection(self, rel, resource_cls):
        self._require_saved()
        return Collection(self._require_api(), resource_cls, href=self.link(rel) or f"{self.href}/{rel}")

    def disk_attachments(self):
        return self.get_linked("diskattachments", DiskAttachment)

    def new_disk_attachment(self, **fields):
        """Build an attachment that ``save()`` will POST to this VM's diskattachments."""
        return self._sub_collection("diskattachments", DiskAttachment).new(**fields)

    def nics(self):
        return self.get_linked("nics", Nic)

    def new_nic(self, **fields):
        return self._sub_collection("nics", Nic).new(**fields)

    def cancel_migration(self):
        """Stop any migration of the VM to another host."""
        return self.do_action("cancelmigration")

    def clone(self, vm, async_=None):
        """Clone this VM into ``vm``, which carries at least the new name."""
        return self.do_action("clone", Action(async_=async_, vm=vm))

    def commit_snapshot(self, async_=None):
        """Permanently restore the VM to the state of the previewed snapshot."""
        return self.do_action("commitsnapshot", Action(async_=async_))

    def detach(self):
        """Detach the VM from its pool."""
        return self.do_action("detach")

    def export(self, storage_domain, discard_snapshots=None, exclusive=None, async_=None):
        """Export the VM to an export storage domain."""
        return self.do_action(
            "export",
            Action(
                async_=async_,
                discard_snapshots=discard_snapshots,
                exclusive=exclusive,
                storage_domain=storage_domain,
            ),
        )

    def freeze_filesystems(self, async_=None):
        return self.do_action("freezefilesystems", Action(async_=async_))

    def logon(self, async_=None):
        """Start the automatic user logon from an external console."""
        return self.do_action("logon", Action(async_=async_))

    def maintenance(self, maintenance_enabled, async_=None):
        """Set global maintenance mode on the hosted engine VM."""
        return self.do_action(
            "maintenance",
            Action(async_=async_, maintenance_enabled=maintenance_enabled),
        )

    def migrate(self, cluster=None, force=None, host=None, async_=None):
        """Migrate the VM, to ``host`` if given or wherever the scheduler decides."""
        return self.do_action(
            "migrate",
            Action(async_=async_, cluster=cluster, force=force, host=host),
        )

    def reboot(self, async_=None):
        return self.do_action("reboot", Action(async_=async_))

    def reorder_mac_addresses(self, async_=None):
        return self.do_action("reordermacaddresses", Action(async_=async_))

    def shutdown(self, async_=None):
        """Ask the guest to shut down."""
        return self.do_action("shutdown", Action(async_=async_))

    def start(self, async_=None, filter=None, pause=None, use_cloud_init=None, use_sysprep=None, vm=None):
        """
        Start the VM.

        ``vm`` carries run-once overrides (for example an ``initialization``)
        applied to this boot only.
        """
        return self.do_action(
            "start",
            Action(
                async_=async_,
                filter=filter,
                pause=pause,
                use_cloud_init=use_cloud_init,
                use_sysprep=use_sysprep,
                vm=vm,
            ),
        )

    def stop(self, async_=None):
        """Force the VM to power off."""
        return self.do_action("stop", Action(async_=async_))

    def suspend(self, async_=None):
        """Save the VM state to disk and stop it."""
        return self.do_action("suspend", Action(async_=async_))

    def thaw_filesystems(self, async_=None):
        return self.do_action("thawfilesystems", Action(async_=async_))

    def undo_snapshot(self, async_=None):
        """Restore the VM to the state it had before previewing a snapshot."""
        return self.do_action("undosnapshot", Action(async_=async_))
