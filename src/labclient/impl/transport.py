"""HTTP transport with fixed-backoff retries."""

import time
from typing import Any, Dict, Iterator, List, Optional

import requests

from ..config.loader import get_transport_settings
from ..errors import ForbiddenError, NotFoundError
from ..utils.logging import get_logger

logger = get_logger(__name__)

RETRYABLE_EXCEPTIONS = (requests.ConnectionError, requests.Timeout)


class HttpTransport:
    """Sends requests to the API and maps error statuses to labclient errors."""

    def __init__(
        self,
        settings: Optional[Dict[str, Any]] = None,
        *,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            settings: Transport settings (see config.loader.get_transport_settings).
                Missing keys fall back to defaults.
            session: Optional requests session to reuse.
        """
        self.settings = get_transport_settings({"transport": settings or {}})
        if not self.settings.get("base_url"):
            raise ValueError("Transport settings must include 'base_url'")
        self.base_url = self.settings["base_url"].rstrip("/")
        self.timeout = self.settings["timeout_seconds"]
        self.max_attempts = int(self.settings["retry"]["max_attempts"])
        self.delay_seconds = float(self.settings["retry"]["delay_seconds"])
        self.session = session or requests.Session()
        self.session.headers.update(self._get_headers())

    def _get_headers(self) -> Dict[str, str]:
        headers = {
            "User-Agent": self.settings["user_agent"],
            "Accept": "application/json",
        }
        if self.settings.get("token"):
            headers["PRIVATE-TOKEN"] = self.settings["token"]
        return headers

    def _absolute(self, url: str) -> str:
        if url.startswith("http://") or url.startswith("https://"):
            return url
        return f"{self.base_url}/{url.lstrip('/')}"

    def _raise_for_status(self, response: requests.Response) -> None:
        if response.status_code == 404:
            raise NotFoundError(f"Not Found: {response.request.method} {response.url}")
        if response.status_code == 403:
            raise ForbiddenError(f"Forbidden: {response.request.method} {response.url}")
        response.raise_for_status()

    def request(self, method: str, url: str, *, json: Any = None) -> requests.Response:
        """
        Send one request, retrying connection errors, timeouts and 5xx responses.

        Raises:
            NotFoundError: On 404
            ForbiddenError: On 403
            requests.HTTPError: On other error statuses (5xx once retries are exhausted)
            requests.RequestException: If the last attempt failed to connect
        """
        target = self._absolute(url)
        attempt = 1
        while True:
            try:
                logger.info(f"{method} {target} (attempt {attempt}/{self.max_attempts})")
                response = self.session.request(method, target, json=json, timeout=self.timeout)
                if response.status_code < 500 or attempt >= self.max_attempts:
                    self._raise_for_status(response)
                    return response
                logger.warning(f"{method} {target} returned {response.status_code}, retrying in {self.delay_seconds}s")
            except RETRYABLE_EXCEPTIONS as e:
                if attempt >= self.max_attempts:
                    logger.error(f"{method} {target} failed after {attempt} attempts: {e}")
                    raise
                logger.warning(f"{method} {target} failed: {e}, retrying in {self.delay_seconds}s")
            time.sleep(self.delay_seconds)
            attempt += 1

    def get(self, url: str) -> Any:
        return self.request("GET", url).json()

    def post(self, url: str, payload: Any = None) -> Any:
        return self.request("POST", url, json=payload).json()

    def delete(self, url: str) -> None:
        self.request("DELETE", url)

    def get_all(self, url: str) -> Iterator[Any]:
        """Yield items of a paged listing, following Link rel="next"."""
        next_url: Optional[str] = url
        while next_url:
            response = self.request("GET", next_url)
            items: List[Any] = response.json()
            yield from items
            next_url = (response.links.get("next") or {}).get("url")
