import asyncio
import re
import requests
from log import get_logger

logger = get_logger(__name__)

HOSTNAME_RE = re.compile(r"[^\w.\-]")
APIKEY_RE = re.compile(r"[^a-z0-9]")

class SonarrError(Exception):
    """Raised when Sonarr is unreachable or answers with something unusable."""

class SonarrAPI:
    """
    Thin client for the Sonarr HTTP API.

    Requests are made with `requests` in a worker thread so the calling
    event loop never blocks. Every failure (network, non-2xx status, non-JSON
    body) surfaces as SonarrError; an empty result is just an empty list.
    """

    def __init__(self, hostname, api_key, port=8989, url_base=None, ssl=False,
                 username=None, password=None, timeout=20):
        if not hostname:
            raise ValueError("Hostname is empty")

        hostname = re.sub(r"^https?://", "", hostname)
        if HOSTNAME_RE.search(hostname):
            raise ValueError("Hostname is not valid")

        if not isinstance(port, int) or isinstance(port, bool) or not port:
            raise ValueError("Port is not a number")

        api_key = api_key or ""
        if len(api_key) != 32:
            raise ValueError("API Key is an invalid length")
        if APIKEY_RE.search(api_key):
            raise ValueError("API Key has invalid characters")

        if url_base and not url_base.startswith("/"):
            url_base = "/" + url_base
        url_base = (url_base or "").rstrip("/")

        scheme = "https" if ssl else "http"
        self.hostname = hostname
        self.port = port
        self.ssl = ssl
        self.timeout = timeout
        self.api_url = f"{scheme}://{hostname}:{port}{url_base}/api/"

        self.session = requests.Session()
        self.session.headers.update({"X-Api-Key": api_key})
        if username and password:
            self.session.auth = (username, password)
        # Self-hosted instances rarely carry valid certificates
        if ssl:
            self.session.verify = False

    def _request(self, method, path, params=None, payload=None):
        url = self.api_url + path
        try:
            response = self.session.request(
                method, url, params=params, json=payload, timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Sonarr {method} {path} failed: {e}")
            raise SonarrError(str(e)) from e

        if "application/json" not in response.headers.get("Content-Type", ""):
            logger.error(f"Sonarr {method} {path} returned non-JSON content")
            raise SonarrError("JSON expected")

        try:
            return response.json()
        except ValueError as e:
            raise SonarrError("Invalid JSON in response") from e

    async def get(self, path, params=None):
        return await asyncio.to_thread(self._request, "GET", path, params)

    async def post(self, path, payload=None):
        return await asyncio.to_thread(self._request, "POST", path, None, payload)

    # --- Endpoints ---

    async def lookup_series(self, term):
        return await self.get("series/lookup", {"term": term}) or []

    async def get_profiles(self):
        return await self.get("profile") or []

    async def get_root_folders(self):
        return await self.get("rootfolder") or []

    async def add_series(self, payload):
        result = await self.post("series", payload)
        if not result:
            raise SonarrError("could not add series, try searching again")
        return result

    async def run_command(self, name):
        return await self.post("command", {"name": name})
