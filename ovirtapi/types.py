"""Embedded value types shared by engine resources."""

from .fields import Boolean, Field, Integer, List, Nested, Reference, Struct


class Link(Struct):
    """Hyperlink to another engine document."""

    href = Field()
    id = Field()
    rel = Field()


class Version(Struct):
    build = Integer()
    comment = Field()
    description = Field()
    full_version = Field()
    id = Field()
    major = Integer()
    minor = Integer()
    name = Field()
    revision = Integer()


class BootMenu(Struct):
    enabled = Boolean()


class Bios(Struct):
    boot_menu = Nested(BootMenu)
    type = Field()


class Console(Struct):
    """Serial console device."""

    enabled = Boolean()


class Core(Struct):
    index = Integer()
    socket = Integer()


class CustomProperty(Struct):
    name = Field()
    regexp = Field()
    value = Field()


class VcpuPin(Struct):
    cpu_set = Field()
    vcpu = Integer()


class CpuTune(Struct):
    vcpu_pins = List(VcpuPin, wrapper="vcpu_pin")


class CpuTopology(Struct):
    cores = Integer()
    sockets = Integer()
    threads = Integer()


class Cpu(Struct):
    architecture = Field()
    cores = List(Core, wrapper="core")
    cpu_tune = Nested(CpuTune)
    level = Integer(string=False)
    mode = Field()
    name = Field()
    speed = Integer(string=False)
    topology = Nested(CpuTopology)
    type = Field()


class Certificate(Struct):
    comment = Field()
    content = Field()
    description = Field()
    id = Field()
    name = Field()
    organization = Field()
    subject = Field()


class Display(Struct):
    """Graphic console configuration (SPICE or VNC)."""

    address = Field()
    allow_override = Boolean()
    certificate = Nested(Certificate)
    copy_paste_enabled = Boolean()
    disconnect_action = Field()
    file_transfer_enabled = Boolean()
    keyboard_layout = Field()
    monitors = Integer()
    port = Integer()
    proxy = Field()
    secure_port = Integer()
    single_qxl_pci = Boolean()
    smartcard_enabled = Boolean()
    type = Field()


class Kernel(Struct):
    version = Nested(Version)


class GuestOperatingSystem(Struct):
    """Operating system reported by the guest agent."""

    architecture = Field()
    codename = Field()
    distribution = Field()
    family = Field()
    kernel = Nested(Kernel)
    version = Nested(Version)


class HighAvailability(Struct):
    enabled = Boolean()
    priority = Integer()


class Configuration(Struct):
    """OVF or other external configuration handed to the engine on import."""

    content = Field(key="data")
    type = Field()


class Dns(Struct):
    search_domains = List("Host", wrapper="host")
    servers = List("Host", wrapper="host")


class Mac(Struct):
    address = Field()


class Ip(Struct):
    address = Field()
    gateway = Field()
    netmask = Field()
    version = Field()


class NicConfiguration(Struct):
    boot_protocol = Field()
    ip = Nested(Ip)
    name = Field()
    on_boot = Boolean()


class AuthorizedKey(Struct):
    comment = Field()
    description = Field()
    id = Field()
    key = Field()
    name = Field()


class File(Struct):
    comment = Field()
    content = Field()
    description = Field()
    id = Field()
    name = Field()
    type = Field()


class User(Struct):
    id = Field()
    href = Field()
    name = Field()
    user_name = Field()
    password = Field()


class GuestNic(Struct):
    boot_protocol = Field()
    id = Field()
    interface = Field()
    linked = Boolean()
    mac = Nested(Mac)
    name = Field()
    on_boot = Boolean()
    plugged = Boolean()


class NetworkConfiguration(Struct):
    dns = Nested(Dns)
    nics = List(GuestNic, wrapper="nic")


class CloudInit(Struct):
    authorized_keys = List(AuthorizedKey, wrapper="authorized_key")
    files = List(File, wrapper="file")
    host = Nested("Host")
    network_configuration = Nested(NetworkConfiguration)
    regenerate_ssh_keys = Boolean()
    timezone = Field()
    users = List(User, wrapper="user")


class Initialization(Struct):
    """cloud-init / sysprep settings applied on first boot."""

    active_directory_ou = Field()
    authorized_ssh_keys = Field()
    cloud_init = Nested(CloudInit)
    configuration = Nested(Configuration)
    custom_script = Field()
    dns_search = Field()
    dns_servers = Field()
    domain = Field()
    host_name = Field()
    input_locale = Field()
    nic_configurations = List(NicConfiguration, wrapper="nic_configuration")
    org_name = Field()
    regenerate_ids = Boolean()
    regenerate_ssh_keys = Boolean()
    root_password = Field()
    system_locale = Field()
    timezone = Field()
    ui_language = Field()
    user_locale = Field()
    user_name = Field()
    windows_license_key = Field()


class Io(Struct):
    threads = Integer()


class MemoryOverCommit(Struct):
    percent = Integer()


class TransparentHugePages(Struct):
    enabled = Boolean()


class MemoryPolicy(Struct):
    ballooning = Boolean()
    guaranteed = Integer()
    max = Integer()
    over_commit = Nested(MemoryOverCommit)
    transparent_hugepages = Nested(TransparentHugePages)


class MigrationBandwidth(Struct):
    # custom_value only applies when assignment_method is "custom"
    assignment_method = Field()
    custom_value = Integer()


class MigrationOptions(Struct):
    auto_converge = Field()
    bandwidth = Nested(MigrationBandwidth)
    compressed = Field()


class Boot(Struct):
    devices = List(wrapper="device")


class OperatingSystem(Struct):
    """Boot and kernel settings of a VM or template."""

    boot = Nested(Boot)
    cmdline = Field()
    custom_kernel_cmdline = Field()
    initrd = Field()
    kernel = Field()
    reported_kernel_cmdline = Field()
    type = Field()
    version = Nested(Version)


class TimeZone(Struct):
    name = Field()
    utc_offset = Field()


class Usb(Struct):
    enabled = Boolean()
    type = Field()


class VmPlacementPolicy(Struct):
    affinity = Field()
    hosts = List("Host", wrapper="host")


class Vlan(Struct):
    id = Integer()


class PassThrough(Struct):
    mode = Field()


class Storage(Struct):
    """Backing storage of a storage domain (NFS export, iSCSI target, ...)."""

    address = Field()
    mount_options = Field()
    nfs_version = Field()
    path = Field()
    port = Integer()
    target = Field()
    type = Field()
    vfs_type = Field()


class Fault(Struct):
    reason = Field()
    detail = Field()


class Action(Struct):
    """
    Request body of ``POST <href>/<action>`` and the engine's reply to it.

    Only the parameters relevant to a given action are set; the reply fills
    ``status`` and, on failure, ``fault``.
    """

    async_ = Boolean(key="async")
    cluster = Reference("Cluster")
    discard_snapshots = Boolean()
    exclusive = Boolean()
    fence_type = Field()
    filter = Boolean()
    force = Boolean()
    host = Reference("Host")
    maintenance_enabled = Boolean()
    pause = Boolean()
    storage_domain = Reference("StorageDomain")
    use_cloud_init = Boolean()
    use_sysprep = Boolean()
    vm = Nested("Vm")
    disk = Nested("Disk")
    template = Nested("Template")
    is_attached = Boolean()
    status = Field()
    fault = Nested(Fault)
