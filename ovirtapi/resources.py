import logging

from .exceptions import OvirtActionError, OvirtError
from .fields import Field, List, Nested, Struct
from .types import Action, Link

logger = logging.getLogger(__name__)

# Keys a placeholder reference carries before it has been fetched.
_PLACEHOLDER_KEYS = {"id", "href", "rel", "name"}


def _wire_bool(value):
    return "true" if value else "false"


class Actions(Struct):
    links = List(Link, key="link")


class OvirtObject(Struct):
    """
    Base for every top-level engine resource.

    A resource with a non-empty ``href`` has been persisted on the engine;
    one without has not. ``save()`` relies on that to pick POST or PUT.
    """

    # Root link rel of the collection holding this type (e.g. "vms").
    collection = None
    # Key of the item list in collection responses (e.g. "vm").
    tag = None
    # Keys stripped from documents sent to the engine.
    read_only_keys = ("link", "actions", "href")

    id = Field()
    href = Field()
    name = Field()
    description = Field()
    comment = Field()
    links = List(Link, key="link")
    actions = Nested(Actions)

    def __init__(self, data=None, api=None, collection_href=None, **fields):
        super().__init__(data, api=api, **fields)
        self.collection_href = collection_href

    def __str__(self):
        return f"{self.__class__.__name__}: {self.name or self.id}"

    def __repr__(self):
        return f"<{self.__class__.__name__}(id={self.id}, name={self.name})>"

    @property
    def is_saved(self):
        return bool(self.href)

    def _require_api(self):
        if self.api is None:
            raise OvirtError(f"{self.__class__.__name__} is not bound to an oVirt connection")
        return self.api

    def _require_saved(self):
        if not self.href:
            raise OvirtError(f"{self.__class__.__name__} has not been saved to the server")

    def _collection_url(self):
        if self.collection_href:
            return self.collection_href
        if not self.collection:
            raise OvirtError(f"{self.__class__.__name__} has no collection to be created in")
        return self._require_api().get_link(self.collection)

    def _save_document(self):
        document = self.to_dict()
        for key in self.read_only_keys:
            document.pop(key, None)
        return document

    def link(self, rel):
        """Return the href of one of this resource's links, or None."""
        for link in self.links or []:
            if link.rel == rel:
                return link.href
        return None

    def save(self):
        """Create the resource (POST) or push local changes (PUT)."""
        api = self._require_api()
        document = self._save_document()
        if self.href:
            logger.debug(f"Updating {self.__class__.__name__} {self.id} at {self.href}")
            response = api.request("PUT", self.href, document)
        else:
            url = self._collection_url()
            logger.debug(f"Creating {self.__class__.__name__} in {url}")
            response = api.request("POST", url, document)
        self.data = response
        logger.info(f"Saved {self.__class__.__name__} '{self.name}' ({self.id})")
        return self

    def update(self):
        """Synchronize the local copy with the one stored on the server."""
        self._require_saved()
        self.data = self._require_api().request("GET", self.href)
        return self

    def resolve(self):
        """Fetch the full resource if this object is only a placeholder link."""
        if self.href and set(self.data) <= _PLACEHOLDER_KEYS:
            # Fill the shared dict in place so the owning document sees it too.
            fresh = self._require_api().request("GET", self.href)
            self.data.clear()
            self.data.update(fresh)
        return self

    def delete(self, async_=None, **params):
        """Remove the resource from the server."""
        self._require_saved()
        if async_ is not None:
            params["async"] = _wire_bool(async_)
        query = {key: value for key, value in params.items() if value is not None}
        self._require_api().request("DELETE", self.href, params=query or None)
        logger.info(f"Deleted {self.__class__.__name__} '{self.name}' ({self.id})")
        # No longer persisted: a later save() would create it again.
        self.data.pop("href", None)

    def action_link(self, name):
        if self.actions:
            for link in self.actions.links or []:
                if link.rel == name:
                    return link.href
        return f"{self.href}/{name}"

    def do_action(self, name, action=None):
        """POST an action document to ``<href>/<name>`` and return the engine's reply."""
        self._require_saved()
        action = action or Action()
        api = self._require_api()
        logger.debug(f"Running action '{name}' on {self.__class__.__name__} {self.id}")
        reply = Action(api.request("POST", self.action_link(name), action.to_dict()), api=api)
        if reply.status == "failed":
            raise OvirtActionError(name, reply.fault)
        return reply

    def get_linked(self, rel, resource_cls):
        """Fetch a list this resource links to, e.g. a VM's ``nics``."""
        self._require_saved()
        href = self.link(rel) or f"{self.href}/{rel}"
        body = self._require_api().request("GET", href)
        items = body.get(resource_cls.tag) or []
        if isinstance(items, dict):
            items = [items]
        return [resource_cls(item, api=self.api, collection_href=href) for item in items]


class Collection:
    """A list endpoint of the engine, either a root link or a resource sub-link."""

    def __init__(self, api, resource_cls, href=None):
        self.api = api
        self.resource_cls = resource_cls
        self.href = href

    def __repr__(self):
        return f"<Collection({self.resource_cls.__name__}, href={self.href or self.resource_cls.collection})>"

    @property
    def url(self):
        if self.href:
            return self.api.resolve_link(self.href)
        return self.api.get_link(self.resource_cls.collection)

    def new(self, **fields):
        """Build an unsaved resource that will be created in this collection."""
        return self.resource_cls(api=self.api, collection_href=self.href, **fields)

    def get(self, id):
        body = self.api.request("GET", f"{self.url}/{id}")
        return self.resource_cls(body, api=self.api, collection_href=self.href)

    def list(self, search=None, max=None):
        params = {}
        if search:
            params["search"] = search
        if max is not None:
            params["max"] = int(max)
        body = self.api.request("GET", self.url, params=params or None)
        items = body.get(self.resource_cls.tag) or []
        if isinstance(items, dict):
            items = [items]
        logger.debug(f"Retrieved {len(items)} {self.resource_cls.__name__} objects from {self.url}")
        return [self.resource_cls(item, api=self.api, collection_href=self.href) for item in items]

    def __iter__(self):
        return iter(self.list())
