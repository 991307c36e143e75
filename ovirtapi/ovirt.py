import json
import logging
import warnings
from urllib.parse import urljoin

import requests
from urllib3.exceptions import InsecureRequestWarning

from runtime.runtime_config import _debug_transport, _ovirt_timeout_seconds, _ovirt_verify_ssl

from .cluster import Cluster, MacPool
from .datacenter import DataCenter
from .disk import Disk
from .exceptions import OvirtAuthenticationError, OvirtError, OvirtRequestError
from .host import Host
from .network import Network, VnicProfile
from .resources import Collection
from .storagedomain import StorageDomain
from .template import Template
from .vm import Vm

logger = logging.getLogger(__name__)


class Ovirt:
    """
    Connection to an oVirt engine REST API.

    Authenticates once against the engine SSO service, reads the API root
    links and then performs one synchronous request per call. ``url`` is the
    API entry point, e.g. ``https://engine.example.com/ovirt-engine/api``.
    """

    SSO_TOKEN_PATH = "/sso/oauth/token"
    SSO_REVOKE_PATH = "/sso/oauth/revoke"
    SSO_SCOPE = "ovirt-app-api"
    API_VERSION = "4"

    COLLECTIONS = {
        "clusters": Cluster,
        "datacenters": DataCenter,
        "disks": Disk,
        "hosts": Host,
        "macpools": MacPool,
        "networks": Network,
        "storagedomains": StorageDomain,
        "templates": Template,
        "vms": Vm,
        "vnicprofiles": VnicProfile,
    }

    def __init__(
        self,
        url=None,
        username=None,
        password=None,
        verify_ssl=None,
        ca_file=None,
        timeout=None,
        debug=None,
    ):
        logger.debug(f"Initializing oVirt connection to: {url}")
        self.url = url.rstrip("/") if url else url
        self.username = username
        self.password = password

        if not self.url:
            raise ValueError("Missing required configuration: oVirt API URL")
        if not all([self.username, self.password]):
            raise ValueError("Missing credentials. Provide OVIRT_USERNAME + OVIRT_PASSWORD")

        self.verify_ssl = _ovirt_verify_ssl() if verify_ssl is None else bool(verify_ssl)
        self.ca_file = ca_file
        self.timeout = timeout or _ovirt_timeout_seconds()
        self.debug = _debug_transport() if debug is None else bool(debug)

        if not self.verify_ssl:
            # Suppress only the InsecureRequestWarning
            warnings.simplefilter("ignore", InsecureRequestWarning)

        self.session = requests.Session()
        self.access_token = None
        self.links = {}
        self.product_info = {}

        logger.debug("Authenticating with the oVirt engine SSO service")
        self.authenticate()

        logger.debug("Fetching API root links")
        self.load_root()
        logger.debug(f"Initialized oVirt connection with {len(self.links)} root links")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self):
        return f"<Ovirt(url={self.url}, username={self.username})>"

    @property
    def engine_url(self):
        """Engine base URL, i.e. the API URL without its trailing ``/api``."""
        if self.url.endswith("/api"):
            return self.url[: -len("/api")]
        return self.url

    @property
    def verify(self):
        """Value for the ``verify`` argument of requests."""
        if self.verify_ssl and self.ca_file:
            return self.ca_file
        return self.verify_ssl

    def _parse_response_json(self, response):
        """Parse JSON from a response and return None for non-JSON bodies."""
        try:
            return response.json()
        except ValueError:
            return None

    def _headers(self):
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Version": self.API_VERSION,
        }
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def authenticate(self):
        """Obtain an SSO access token with the configured username and password."""
        token_url = f"{self.engine_url}{self.SSO_TOKEN_PATH}"
        logger.debug(f"Requesting SSO token from {token_url}")
        response = self.session.post(
            token_url,
            data={
                "grant_type": "password",
                "scope": self.SSO_SCOPE,
                "username": self.username,
                "password": self.password,
            },
            headers={"Accept": "application/json"},
            verify=self.verify,
            timeout=self.timeout,
        )

        response_data = self._parse_response_json(response)
        if not isinstance(response_data, dict):
            response_data = {}
        if response.status_code >= 400 or not response_data.get("access_token"):
            error = response_data.get("error") or f"HTTP {response.status_code}"
            logger.error(f"oVirt SSO login failed: {error}")
            raise OvirtAuthenticationError(error, response_data.get("error_description"))

        self.access_token = response_data["access_token"]
        logger.info(f"Logged in to {self.engine_url} as {self.username}.")

    def load_root(self):
        """Read the API entry point and remember its links by rel."""
        body = self.request("GET", self.url)
        self.links = {
            link["rel"]: link["href"]
            for link in body.get("link", [])
            if isinstance(link, dict) and link.get("rel") and link.get("href")
        }
        self.product_info = body.get("product_info", {})
        version = self.product_info.get("version", {}).get("full_version")
        if version:
            logger.info(f"Connected to oVirt engine {version}")

    def resolve_link(self, href):
        """Turn an engine href (``/ovirt-engine/api/vms/123``) into an absolute URL."""
        if href.startswith("http://") or href.startswith("https://"):
            return href
        return urljoin(f"{self.url}/", href)

    def get_link(self, rel):
        """Absolute URL of an API root link, e.g. ``get_link("vms")``."""
        href = self.links.get(rel)
        if not href:
            raise OvirtError(f"oVirt API root has no link with rel '{rel}'")
        return self.resolve_link(href)

    def get_link_body(self, rel, id=""):
        """GET a root collection, or one member of it when ``id`` is given."""
        url = self.get_link(rel)
        if id:
            url = f"{url}/{id}"
        return self.request("GET", url)

    def _request_error(self, method, url, response):
        response_data = self._parse_response_json(response)
        reason = None
        detail = None
        if isinstance(response_data, dict):
            fault = response_data.get("fault")
            source = fault if isinstance(fault, dict) else response_data
            reason = source.get("reason")
            detail = source.get("detail")
        if not reason:
            reason = response.reason or None
        if not detail and response_data is None and response.text:
            detail = response.text.strip()
        logger.error(f"{method} {url} failed with {response.status_code}: {reason}")
        return OvirtRequestError(
            response.status_code,
            reason=reason,
            detail=detail,
            method=method,
            url=url,
        )

    def request(self, method, href, body=None, params=None):
        """
        Send one authenticated request and return the decoded JSON body.

        Non-2xx answers raise OvirtRequestError. Transport errors from
        requests and JSON decode errors are passed through unchanged.
        """
        url = self.resolve_link(href)
        method_upper = method.upper()

        request_kwargs = {
            "headers": self._headers(),
            "verify": self.verify,
            "timeout": self.timeout,
            "params": params,
        }
        if body is not None:
            request_kwargs["data"] = json.dumps(body, indent=4)

        if self.debug:
            logger.debug(f">>> {method_upper} {url} params={params}\n{request_kwargs.get('data', '')}")
        else:
            logger.debug(f"Making {method_upper} request to: {url}")

        response = self.session.request(method_upper, url, **request_kwargs)

        if self.debug:
            logger.debug(f"<<< {response.status_code} {response.reason} {url}\n{response.text}")
        else:
            logger.debug(f"Response status code: {response.status_code}")

        if response.status_code >= 400:
            raise self._request_error(method_upper, url, response)

        if not response.text or not response.text.strip():
            return {}
        return response.json()

    def collection(self, rel):
        """Return the Collection for a root rel such as ``"vms"``."""
        resource_cls = self.COLLECTIONS.get(rel)
        if resource_cls is None:
            raise OvirtError(f"Unsupported oVirt collection: {rel}")
        return Collection(self, resource_cls)

    def __getitem__(self, rel):
        """Shortcut for accessing a collection."""
        return self.collection(rel)

    @property
    def clusters(self):
        return self.collection("clusters")

    @property
    def datacenters(self):
        return self.collection("datacenters")

    @property
    def disks(self):
        return self.collection("disks")

    @property
    def hosts(self):
        return self.collection("hosts")

    @property
    def macpools(self):
        return self.collection("macpools")

    @property
    def networks(self):
        return self.collection("networks")

    @property
    def storagedomains(self):
        return self.collection("storagedomains")

    @property
    def templates(self):
        return self.collection("templates")

    @property
    def vms(self):
        return self.collection("vms")

    @property
    def vnicprofiles(self):
        return self.collection("vnicprofiles")

    def get_datacenter(self, id):
        return self.datacenters.get(id)

    def get_vm(self, id):
        return self.vms.get(id)

    def close(self):
        """Revoke the SSO token and close the HTTP session."""
        if self.access_token:
            revoke_url = f"{self.engine_url}{self.SSO_REVOKE_PATH}"
            try:
                self.session.post(
                    revoke_url,
                    data={"scope": self.SSO_SCOPE, "token": self.access_token},
                    headers={"Accept": "application/json"},
                    verify=self.verify,
                    timeout=self.timeout,
                )
            except requests.exceptions.RequestException as err:
                logger.warning(f"Failed to revoke oVirt SSO token: {err}")
            self.access_token = None
        self.session.close()
        logger.debug(f"Closed oVirt connection to {self.url}")
