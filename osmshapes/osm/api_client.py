"""
Overpass API client

Handles communication with Overpass API including:
- Rate limiting
- Retry logic
- Error handling
"""

import time
import requests
from typing import Dict, Any, Optional
from loguru import logger

from ..config import get_config


class OverpassAPIClient:
    """Client for interacting with Overpass API"""

    def __init__(self, overpass_url: Optional[str] = None):
        self.config = get_config()
        self.overpass_url = overpass_url or self.config.api.overpass_url
        self.timeout = self.config.api.overpass_timeout
        self.max_retries = self.config.api.max_retries
        self._last_request_time = 0.0
        self._min_request_interval = self.config.api.min_request_interval

    def _rate_limit(self):
        """Ensure we don't exceed rate limits"""
        elapsed = time.time() - self._last_request_time
        if elapsed < self._min_request_interval:
            time.sleep(self._min_request_interval - elapsed)
        self._last_request_time = time.time()

    def query(self, query: str, retry_delay: Optional[float] = None) -> Dict[str, Any]:
        """
        Execute Overpass API query with retry logic

        Args:
            query: Overpass QL query string
            retry_delay: Initial delay between retries (increases with attempts)

        Returns:
            JSON response from Overpass API

        Raises:
            ValueError: If the query is empty
            RuntimeError: If query fails after all retries
        """
        if not query or not query.strip():
            raise ValueError("Query cannot be empty")

        if retry_delay is None:
            retry_delay = self.config.api.retry_delay

        self._rate_limit()

        headers = {
            "User-Agent": self.config.api.user_agent,
            "Content-Type": "application/x-www-form-urlencoded"
        }

        for attempt in range(self.max_retries):
            last_attempt = attempt == self.max_retries - 1
            try:
                response = requests.post(
                    self.overpass_url,
                    data={"data": query},
                    headers=headers,
                    timeout=self.timeout
                )
                response.raise_for_status()
                return response.json()
            except requests.exceptions.Timeout:
                wait_time = retry_delay * (attempt + 1)
                logger.warning(f"Overpass timeout (attempt {attempt + 1}/{self.max_retries}). Retrying in {wait_time}s...")
                if not last_attempt:
                    time.sleep(wait_time)
                else:
                    logger.error(f"Overpass timeout after {self.max_retries} attempts")
                    raise RuntimeError(f"Overpass API timeout after {self.max_retries} attempts")
            except requests.exceptions.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                if status == 400:
                    logger.error("Overpass rejected the query (HTTP 400)")
                    raise RuntimeError("Invalid query syntax. Please check your Overpass QL.") from e
                if status in [429, 504] and not last_attempt:
                    wait_time = retry_delay * (attempt + 1)
                    logger.warning(f"Overpass {status} (attempt {attempt + 1}/{self.max_retries}). Retrying in {wait_time}s...")
                    time.sleep(wait_time)
                else:
                    logger.error(f"Overpass failed: HTTP {status} after {attempt + 1} attempts")
                    raise RuntimeError(f"Overpass API HTTP error {status} after {attempt + 1} attempts") from e
            except requests.exceptions.RequestException as e:
                logger.warning(f"Overpass request failed (attempt {attempt + 1}): {e}")
                if not last_attempt:
                    time.sleep(retry_delay * (attempt + 1))
                else:
                    logger.error(f"Overpass failed: request exception after {self.max_retries} attempts: {e}")
                    raise RuntimeError(f"Overpass API request failed after {self.max_retries} attempts: {e}") from e

        raise RuntimeError(f"Overpass API query not attempted (max_retries={self.max_retries})")
