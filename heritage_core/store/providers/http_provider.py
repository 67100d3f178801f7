# heritage_core/store/providers/http_provider.py
from typing import Optional
from urllib.parse import quote
import requests
from heritage_core.errors import StoreUnavailableError
from heritage_core.logger import get_logger
from heritage_core.store.provider import StoreProvider

log = get_logger("Heritage.Store.HTTP")


class HTTPStorage(StoreProvider):
    """
    Gateway to a remote key/value service.

    Routes:
    - GET  {base}/healthz      liveness probe
    - GET  {base}/data/{key}   raw bytes, 404 when absent
    - PUT  {base}/data/{key}   raw bytes body

    Writes are billed to the caller whose grant is set with set_grant().
    """
    def __init__(self, base_url: str, timeout: float = 5):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._grant: Optional[str] = None

    def set_grant(self, grant: str):
        """Stores the bearer grant of the calling identity."""
        self._grant = grant

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/octet-stream"}
        if self._grant:
            headers["Authorization"] = f"Bearer {self._grant}"
        return headers

    def _url(self, key: str) -> str:
        return f"{self.base_url}/data/{quote(key, safe='')}"

    def is_available(self) -> bool:
        url = f"{self.base_url}/healthz"
        try:
            res = requests.get(url, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            log.error(f"[HTTP PROBE] {url} unreachable: {e}")
            return False
        if not res.ok:
            log.warning(f"[HTTP PROBE] {res.status_code} {res.reason}")
            return False
        return True

    def get(self, key: str) -> bytes:
        url = self._url(key)
        log.debug(f"[HTTP GET] → {url}")
        try:
            res = requests.get(url, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            raise StoreUnavailableError(f"GET {url} failed: {e}") from e

        if res.status_code == 404:
            return b""
        if not res.ok:
            log.error(f"[HTTP GET] {res.status_code}: {res.text}")
            raise StoreUnavailableError(f"GET {url} returned {res.status_code}")
        return res.content

    def set(self, key: str, value: bytes) -> None:
        url = self._url(key)
        log.debug(f"[HTTP PUT] → {url} | bytes={len(value)}")
        try:
            res = requests.put(url, data=value, headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            raise StoreUnavailableError(f"PUT {url} failed: {e}") from e

        if not res.ok:
            log.error(f"[HTTP PUT] {res.status_code}: {res.text}")
            raise StoreUnavailableError(f"PUT {url} returned {res.status_code}")
