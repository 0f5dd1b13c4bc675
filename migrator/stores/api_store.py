"""Record store backed by a REST API."""

import logging
import time
from typing import Any, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..errors import RecordStoreError
from .base import RecordStore

logger = logging.getLogger(__name__)


class APIRecordStore(RecordStore):
    """
    Generic REST record store.

    Expects the API to expose, per object:
    - GET    /{object}/count        -> {"count": N}
    - GET    /{object}?offset&limit -> {"records": [...]}
    - DELETE /{object}/{id}
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        dry_run: bool = False,
        page_size: int = 200,
        rate_limit: float = 10.0,
        max_retries: int = 3,
        backoff_factor: float = 2.0,
        timeout: float = 30.0
    ):
        """
        Initialize the store.

        Args:
            base_url: Base URL for the API
            api_key: Bearer token
            dry_run: If True, deletions are only logged
            page_size: Records per query request
            rate_limit: Max requests per second
            max_retries: Retries on 429 and 5xx responses
            backoff_factor: Retry backoff factor
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.dry_run = dry_run
        self.page_size = page_size
        self.rate_limit = rate_limit
        self.timeout = timeout
        self._last_request_time = 0.0
        self._session = self._create_session(max_retries, backoff_factor)

    def _create_session(self, max_retries: int, backoff_factor: float) -> requests.Session:
        """Create a requests session with retry logic and authentication."""
        session = requests.Session()

        retries = Retry(
            total=max_retries,
            backoff_factor=backoff_factor,
            status_forcelist=[429, 500, 502, 503, 504],
        )
        adapter = HTTPAdapter(max_retries=retries)
        session.mount("https://", adapter)
        session.mount("http://", adapter)

        if self.api_key:
            session.headers["Authorization"] = f"Bearer {self.api_key}"
        session.headers["Content-Type"] = "application/json"

        return session

    def _rate_limit_wait(self):
        """Wait to respect rate limits."""
        if self.rate_limit > 0:
            elapsed = time.time() - self._last_request_time
            wait_time = (1.0 / self.rate_limit) - elapsed
            if wait_time > 0:
                time.sleep(wait_time)
        self._last_request_time = time.time()

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        self._rate_limit_wait()

        try:
            response = self._session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise RecordStoreError(
                f"{method} {url} failed: {e}",
                status_code=e.response.status_code if e.response is not None else None,
            ) from e
        except requests.exceptions.RequestException as e:
            raise RecordStoreError(f"{method} {url} failed: {e}") from e

        return response.json() if response.text else {}

    def count(self, object_name: str) -> int:
        data = self._request("GET", f"/{object_name}/count")
        return int(data.get("count", 0))

    def query(self, object_name: str) -> List[Dict[str, Any]]:
        records: List[Dict[str, Any]] = []
        offset = 0

        while True:
            data = self._request(
                "GET", f"/{object_name}",
                params={"offset": offset, "limit": self.page_size},
            )
            batch = data.get("records", [])
            records.extend(batch)
            offset += len(batch)

            if len(batch) < self.page_size:
                break

        logger.debug(f"Queried {len(records)} {object_name} records")
        return records

    def delete_records(self, object_name: str) -> int:
        records = self.query(object_name)

        if self.dry_run:
            logger.info(f"[DRY RUN] Would delete {len(records)} {object_name} records")
            return 0

        deleted = 0
        for record in records:
            record_id = record.get("Id") or record.get("id")
            if not record_id:
                continue
            self._request("DELETE", f"/{object_name}/{record_id}")
            deleted += 1

        logger.info(f"Deleted {deleted} {object_name} records")
        return deleted
