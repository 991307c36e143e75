"""Typed attribute descriptors over engine JSON documents.

The engine sends booleans as "true"/"false" and most integers as decimal
strings, and wraps lists in a single-key object (``{"cores": {"core": []}}``).
The descriptors here hide that: reads return Python values, writes store the
wire form in the owning object's ``data`` dict.
"""

from __future__ import annotations

import json
import logging
from importlib import import_module

logger = logging.getLogger(__name__)


class Field:
    """Plain string attribute stored under ``key`` in the owner's data."""

    def __init__(self, key=None):
        self.key = key
        self.name = None

    def __set_name__(self, owner, name):
        self.name = name
        if self.key is None:
            self.key = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        raw = instance.data.get(self.key)
        if raw is None:
            return None
        return self.decode(raw, instance)

    def __set__(self, instance, value):
        if value is None:
            instance.data.pop(self.key, None)
            return
        instance.data[self.key] = self.encode(value)

    def decode(self, raw, instance):
        return raw

    def encode(self, value):
        return str(value)

    def serialize(self, raw):
        """Return the wire value that a save should send for ``raw``."""
        return raw


class Boolean(Field):
    def decode(self, raw, instance):
        if isinstance(raw, bool):
            return raw
        return str(raw).strip().lower() == "true"

    def encode(self, value):
        if isinstance(value, str):
            value = value.strip().lower() in {"1", "true", "yes", "on"}
        return "true" if value else "false"


class Integer(Field):
    """Integer attribute; ``string=False`` keeps it a JSON number on the wire."""

    def __init__(self, key=None, string=True):
        super().__init__(key)
        self.string = string

    def decode(self, raw, instance):
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.debug(f"Non-integer value for {self.key}: {raw!r}")
            return None

    def encode(self, value):
        value = int(value)
        return str(value) if self.string else value


class Nested(Field):
    """Embedded struct; the returned object shares the owner's dict."""

    def __init__(self, struct_cls, key=None):
        super().__init__(key)
        self._struct_cls = struct_cls

    @property
    def struct_cls(self):
        # Allows forward references by class name between modules.
        if isinstance(self._struct_cls, str):
            self._struct_cls = Struct.lookup(self._struct_cls)
        return self._struct_cls

    def decode(self, raw, instance):
        if not isinstance(raw, dict):
            return None
        return self.struct_cls(raw, api=instance.api)

    def encode(self, value):
        if isinstance(value, Struct):
            return value.data
        if isinstance(value, dict):
            return value
        raise TypeError(f"{self.name} expects {self.struct_cls.__name__}, got {type(value).__name__}")

    def serialize(self, raw):
        if not isinstance(raw, dict):
            return raw
        return self.struct_cls(raw).to_dict()


class List(Field):
    """
    List attribute.

    ``item`` is a Struct subclass (or its name) for lists of objects, or None
    for lists of plain strings. ``wrapper`` is the inner key the engine uses
    (``"core"`` for ``{"cores": {"core": [...]}}``); None means a bare list.
    The returned list is a fresh copy: assign a new list to change it.
    """

    def __init__(self, item=None, key=None, wrapper=None):
        super().__init__(key)
        self._item = item
        self.wrapper = wrapper

    @property
    def item(self):
        if isinstance(self._item, str):
            self._item = Struct.lookup(self._item)
        return self._item

    def _unwrap(self, raw):
        if isinstance(raw, dict) and self.wrapper:
            raw = raw.get(self.wrapper, [])
        if isinstance(raw, dict):
            raw = [raw]
        return raw if isinstance(raw, list) else []

    def _wrap(self, items):
        return {self.wrapper: items} if self.wrapper else items

    def decode(self, raw, instance):
        items = self._unwrap(raw)
        if self.item is None:
            return list(items)
        return [self.item(entry, api=instance.api) for entry in items if isinstance(entry, dict)]

    def encode(self, value):
        items = []
        for entry in value:
            if isinstance(entry, Struct):
                items.append(entry.data)
            elif self.item is None:
                items.append(str(entry))
            else:
                items.append(entry)
        return self._wrap(items)

    def serialize(self, raw):
        items = self._unwrap(raw)
        if self.item is not None:
            items = [self.item(entry).to_dict() for entry in items if isinstance(entry, dict)]
        return self._wrap(items)


class Struct:
    """Base for every engine document; declared fields map onto ``data``."""

    registry = {}
    _fields = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        fields = {}
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, Field):
                    fields[name] = attr
        cls._fields = fields
        Struct.registry[cls.__name__] = cls

    @classmethod
    def lookup(cls, name):
        if name not in Struct.registry:
            # Resource classes register themselves when the connection module loads them.
            import_module("ovirtapi.ovirt")
        return Struct.registry[name]

    def __init__(self, data=None, api=None, **fields):
        self.data = data if data is not None else {}
        self.api = api
        for name, value in fields.items():
            if name not in self._fields:
                raise AttributeError(f"{self.__class__.__name__} has no field '{name}'")
            setattr(self, name, value)

    @classmethod
    def from_dict(cls, data, api=None):
        return cls(dict(data or {}), api=api)

    def to_dict(self):
        """Serialize declared fields only, dropping unset ones."""
        document = {}
        for field in self._fields.values():
            raw = self.data.get(field.key)
            if raw is None:
                continue
            document[field.key] = field.serialize(raw)
        return document

    def to_json(self, indent=4):
        return json.dumps(self.to_dict(), indent=indent)

    def __eq__(self, other):
        if not isinstance(other, Struct):
            return NotImplemented
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    def __repr__(self):
        shown = ", ".join(f"{key}={value!r}" for key, value in self.to_dict().items() if not isinstance(value, (dict, list)))
        return f"<{self.__class__.__name__}({shown})>"


class Reference(Nested):
    """
    Link to another resource embedded in a document (``vm.cluster``).

    Only the identifying keys are sent back on save; call ``resolve()`` on the
    returned object to fetch the full resource.
    """

    def serialize(self, raw):
        if not isinstance(raw, dict):
            return raw
        return {key: raw[key] for key in ("id", "href", "name") if raw.get(key) is not None}
