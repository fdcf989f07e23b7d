"""
Blocking client for a running registry service.

Each call is one HTTP round trip. Anything that keeps the call from
completing normally (connection refused, timeout, an unexpected status)
is raised as ``RegistryUnavailableError`` so callers have a single
failure to handle.
"""

import logging
from typing import Any, List, Optional

import requests

from taxpayer_registry.core.errors import DuplicateTaxPayerError, RegistryUnavailableError
from taxpayer_registry.schemas.taxpayer import TaxPayer

logger = logging.getLogger(__name__)


class RegistryClient:
    def __init__(self, base_url: str = "http://localhost:8000", session: Optional[Any] = None, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs: Any):
        url = f"{self.base_url}{path}"
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.error(f"{method} {url} failed: {exc}")
            raise RegistryUnavailableError(str(exc)) from exc

    def _expect(self, resp, expected_status: int) -> None:
        if resp.status_code != expected_status:
            logger.error(f"Registry answered {resp.status_code}, expected {expected_status}")
            raise RegistryUnavailableError(f"Unexpected HTTP {resp.status_code} from registry")

    def add_taxpayer(self, tid: str, first_name: str, last_name: str, address: str) -> None:
        payload = {"tid": tid, "firstName": first_name, "lastName": last_name, "address": address}
        resp = self._request("POST", "/taxpayers", json=payload)
        if resp.status_code == 409:
            raise DuplicateTaxPayerError(tid)
        self._expect(resp, 201)

    def get_taxpayers(self) -> List[TaxPayer]:
        resp = self._request("GET", "/taxpayers")
        self._expect(resp, 200)
        return [TaxPayer.model_validate(item) for item in resp.json()]

    def search_taxpayer(self, tid: str) -> Optional[TaxPayer]:
        resp = self._request("GET", "/taxpayers/search", params={"tid": tid})
        self._expect(resp, 200)
        data = resp.json()
        if data is None:
            return None
        return TaxPayer.model_validate(data)
