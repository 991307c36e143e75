from .fields import Boolean, Field, Integer, Nested, Reference, Struct
from .resources import OvirtObject
from .types import Action, Cpu, Display, HighAvailability, MemoryPolicy, OperatingSystem


class TemplateVersion(Struct):
    base_template = Reference("Template")
    version_name = Field()
    version_number = Integer()


class Template(OvirtObject):
    """
    VM template.

    Creating one needs the source ``vm`` (by id or name); the engine copies
    its disks, so the POST returns while the template is still locked.
    """

    collection = "templates"
    tag = "template"

    vm = Reference("Vm")
    cluster = Reference("Cluster")
    status = Field()
    type = Field()
    memory = Integer()
    memory_policy = Nested(MemoryPolicy)
    cpu = Nested(Cpu)
    os = Nested(OperatingSystem)
    display = Nested(Display)
    high_availability = Nested(HighAvailability)
    stateless = Boolean()
    delete_protected = Boolean()
    creation_time = Integer(string=False)
    version = Nested(TemplateVersion)

    def export(self, storage_domain, exclusive=None, async_=None):
        """Export the template to an export storage domain."""
        return self.do_action(
            "export",
            Action(async_=async_, exclusive=exclusive, storage_domain=storage_domain),
        )
