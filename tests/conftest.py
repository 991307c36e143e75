"""In-memory stand-in for the oVirt engine used by the unit tests."""
import json
from urllib.parse import urlparse

import pytest
import requests

from ovirtapi.ovirt import Ovirt

ENGINE_HOST = "https://engine.example.com"
API_PATH = "/ovirt-engine/api"
ENGINE_URL = f"{ENGINE_HOST}{API_PATH}"
USERNAME = "admin@internal"
PASSWORD = "secret"
TOKEN = "tok-123"

TAGS = {
    "clusters": "cluster",
    "datacenters": "data_center",
    "diskattachments": "disk_attachment",
    "disks": "disk",
    "hosts": "host",
    "macpools": "mac_pool",
    "networks": "network",
    "nics": "nic",
    "storagedomains": "storage_domain",
    "templates": "template",
    "vms": "vm",
    "vnicprofiles": "vnic_profile",
}

SUB_COLLECTIONS = {
    "datacenters": ("clusters", "storagedomains", "networks"),
    "vms": ("diskattachments", "nics"),
}


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None, reason="OK"):
        self.status_code = status_code
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text
        self.reason = reason

    @property
    def content(self):
        return self.text.encode()

    def json(self):
        return json.loads(self.text)


class FakeEngine:
    """Routes requests.Session calls to documents kept in a dict by path."""

    def __init__(self):
        self.docs = {}
        self.collections = {f"{API_PATH}/{rel}" for rel in TAGS if rel not in ("diskattachments", "nics")}
        self.calls = []
        self.posts = []
        self.failing_actions = set()
        self.overrides = {}
        self.closed = False
        self._next_id = 0

    # requests.Session interface

    def post(self, url, data=None, headers=None, verify=None, timeout=None):
        self.posts.append({"url": url, "data": data, "verify": verify, "timeout": timeout})
        path = urlparse(url).path
        if path.endswith("/sso/oauth/token"):
            if data.get("username") == USERNAME and data.get("password") == PASSWORD:
                return FakeResponse(200, {"access_token": TOKEN, "token_type": "bearer", "exp": "0"})
            return FakeResponse(
                400,
                {"error": "access_denied", "error_description": "Cannot authenticate user"},
                reason="Bad Request",
            )
        if path.endswith("/sso/oauth/revoke"):
            return FakeResponse(200, {})
        return FakeResponse(404, {"reason": "Not Found"}, reason="Not Found")

    def request(self, method, url, headers=None, verify=None, timeout=None, params=None, data=None):
        body = json.loads(data) if data else None
        self.calls.append(
            {
                "method": method,
                "url": url,
                "headers": headers or {},
                "verify": verify,
                "timeout": timeout,
                "params": params,
                "body": body,
            }
        )
        path = urlparse(url).path.rstrip("/")
        if (method, path) in self.overrides:
            return self.overrides[(method, path)]
        if path == API_PATH and method == "GET":
            return FakeResponse(200, self.root())
        if method == "GET":
            return self._get(path, params)
        if method == "POST":
            return self._post(path, body)
        if method == "PUT":
            return self._put(path, body)
        if method == "DELETE":
            return self._delete(path)
        return FakeResponse(405, {"reason": "Method Not Allowed"}, reason="Method Not Allowed")

    def close(self):
        self.closed = True

    # helpers

    def root(self):
        return {
            "link": [{"href": f"{API_PATH}/{rel}", "rel": rel} for rel in sorted(TAGS)],
            "product_info": {"name": "oVirt Engine", "version": {"full_version": "4.5.4", "major": "4"}},
        }

    def not_found(self, path):
        return FakeResponse(
            404,
            {"reason": "Operation Failed", "detail": f"Entity not found: {path}"},
            reason="Not Found",
        )

    def add(self, rel, document, parent=None):
        """Store a document as if it had been created through the API."""
        collection = parent if parent else f"{API_PATH}/{rel}"
        self._next_id += 1
        doc_id = document.get("id") or f"{rel}-{self._next_id}"
        href = f"{collection}/{doc_id}"
        doc = dict(document)
        doc["id"] = doc_id
        doc["href"] = href
        doc["link"] = []
        for sub in SUB_COLLECTIONS.get(rel, ()):
            self.collections.add(f"{href}/{sub}")
            doc["link"].append({"href": f"{href}/{sub}", "rel": sub})
        self.docs[href] = doc
        return doc

    def _get(self, path, params):
        if path in self.docs:
            return FakeResponse(200, self.docs[path])
        if path in self.collections:
            rel = path.rsplit("/", 1)[-1]
            items = [doc for href, doc in self.docs.items() if href.rsplit("/", 1)[0] == path]
            if params and params.get("max") is not None:
                items = items[: int(params["max"])]
            return FakeResponse(200, {TAGS[rel]: items})
        return self.not_found(path)

    def _post(self, path, body):
        if path in self.collections:
            rel = path.rsplit("/", 1)[-1]
            parent = path if path.count("/") > 3 else None
            return FakeResponse(201, self.add(rel, body or {}, parent=parent), reason="Created")
        owner, _, action = path.rpartition("/")
        if owner in self.docs:
            reply = dict(body or {})
            if action in self.failing_actions:
                reply["status"] = "failed"
                reply["fault"] = {"reason": "Operation Failed", "detail": f"Cannot {action} VM."}
            else:
                reply["status"] = "complete"
            return FakeResponse(200, reply)
        return self.not_found(path)

    def _put(self, path, body):
        if path not in self.docs:
            return self.not_found(path)
        self.docs[path].update(body or {})
        return FakeResponse(200, self.docs[path])

    def _delete(self, path):
        if path not in self.docs:
            return self.not_found(path)
        del self.docs[path]
        return FakeResponse(200, text="")


@pytest.fixture
def engine(monkeypatch):
    for key in ("OVIRT_VERIFY_SSL", "OVIRT_TIMEOUT", "DEBUG_TRANSPORT"):
        monkeypatch.delenv(key, raising=False)
    fake = FakeEngine()
    monkeypatch.setattr(requests, "Session", lambda: fake)
    return fake


@pytest.fixture
def api(engine):
    return Ovirt(ENGINE_URL, USERNAME, PASSWORD)
