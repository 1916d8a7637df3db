"""
Inventory API Client Module
Reads and updates wine inventory through the storefront's /api/inventory endpoints
"""
import threading
from typing import Dict, List, Optional

import requests

from .auto_tagger import parse_tags_field
from .errors import InventoryError


class InventoryClient:
    """HTTP client for the storefront inventory API"""

    def __init__(self, config, logger, session: Optional[requests.Session] = None):
        """
        Initialize inventory client

        Args:
            config: Configuration object
            logger: Logger instance
            session: Optional pre-configured requests session, shared by all threads.
                When omitted, each thread gets its own session.
        """
        self.config = config
        self.logger = logger
        self.base_url = config.inventory_api_url.rstrip('/')
        self.timeout = config.inventory_api_timeout

        self._shared_session = self._configure_session(session) if session is not None else None
        self._local = threading.local()

    def _configure_session(self, session: requests.Session) -> requests.Session:
        session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            'Cache-Control': 'no-cache',
        })
        if self.config.inventory_api_token:
            session.headers['Authorization'] = f"Bearer {self.config.inventory_api_token}"
        return session

    @property
    def session(self) -> requests.Session:
        """Session for the calling thread"""
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._configure_session(requests.Session())
            self._local.session = session
        return session

    def _request(self, method: str, path: str, **kwargs) -> Dict:
        """
        Send a request and unwrap the {success, error, ...} envelope

        Raises:
            InventoryError: On transport errors, non-2xx status, bad JSON or success=false
        """
        url = f"{self.base_url}{path}"
        self.logger.debug(f"API Request: {method} {url}")

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.Timeout:
            raise InventoryError("Request timed out. Please try again.")
        except requests.RequestException as e:
            raise InventoryError(f"Network error connecting to inventory API: {e}")

        self.logger.debug(f"API Response: {response.status_code}")

        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            raise InventoryError(
                f"Invalid response from inventory API (HTTP {response.status_code})",
                status_code=response.status_code
            )

        if not response.ok or not body.get('success'):
            error = body.get('error') or f"HTTP {response.status_code}"
            raise InventoryError(error, status_code=response.status_code)

        return body

    def fetch_all_inventory(self) -> List[Dict]:
        """
        Fetch every inventory record (admin view)

        Returns:
            List[Dict]: Inventory records with tags decoded to lists

        Raises:
            InventoryError: If the inventory cannot be fetched
        """
        try:
            body = self._request('GET', '/inventory', params={'admin': 'true'})
        except InventoryError as e:
            raise InventoryError(f"Failed to fetch wines: {e.message}", status_code=e.status_code)

        records = body.get('inventory') or []
        # Malformed entries pass through untouched and fail per record in the batch
        for record in records:
            if isinstance(record, dict):
                record['tags'] = parse_tags_field(record.get('tags'))

        self.logger.debug(f"Fetched {len(records)} inventory records")
        return records

    def update_inventory_tags(self, record_id, tags: List[str]) -> Dict:
        """
        Replace the tags of one inventory record

        Args:
            record_id: Inventory record id
            tags: New tag list

        Returns:
            Dict: Updated record as returned by the API (may be empty)

        Raises:
            InventoryError: If the update is rejected or fails
        """
        try:
            body = self._request('PUT', f'/inventory/{record_id}', json={'tags': list(tags)})
        except InventoryError as e:
            raise InventoryError(e.message, status_code=e.status_code, record_id=record_id)

        return body.get('item') or {}
