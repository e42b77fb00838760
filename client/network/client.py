"""
Purpose: Wrap navigation server calls with retry/back-off for robustness.
Dependencies: requests, time, logging, hexnav/config.py.
Ext Hooks: Add authentication; cache clamp results per unit.
Client Only: HTTP client with resilience; falls back to a direct path when offline.
"""

import logging
import time
from typing import Any, Dict, List, Optional, Tuple

import requests

from hexnav.config import SERVER_URL

logger = logging.getLogger(__name__)


class NetworkClient:
    def __init__(self, base_url: str = SERVER_URL, max_retries: int = 3, retry_delay: float = 1.0, backoff_factor: float = 2.0):
        self.base_url = base_url.rstrip('/')
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.backoff_factor = backoff_factor
        self.last_error: Optional[str] = None  # server's message for the last rejected request

    def post_with_retry(self, endpoint: str, data: Dict[str, Any], timeout: float = 5.0) -> Optional[Dict[str, Any]]:
        """
        Post with exponential backoff retry. None once every attempt failed.

        A 4xx answer means the server validated the request and refused it;
        sending it again can't help, so it returns None straight away and
        keeps the server's message in last_error.
        """
        url = f"{self.base_url}{endpoint}"
        delay = self.retry_delay
        self.last_error = None
        for attempt in range(self.max_retries):
            try:
                response = requests.post(url, json=data, timeout=timeout)
                if response.status_code == 200:
                    return response.json()
                if 400 <= response.status_code < 500:
                    self.last_error = _error_message(response)
                    logger.warning("Server rejected %s (%s): %s", endpoint, response.status_code, self.last_error)
                    return None
                logger.warning("Server error %s on %s attempt %d", response.status_code, endpoint, attempt + 1)
            except requests.exceptions.RequestException as e:
                logger.warning("Network error on %s attempt %d: %s", endpoint, attempt + 1, e)

            if attempt < self.max_retries - 1:
                logger.info("Retrying %s in %.1f seconds", endpoint, delay)
                time.sleep(delay)
                delay *= self.backoff_factor
        return None


def _error_message(response) -> str:
    """The blueprint answers {"error": ...}; anything else falls back to the status code."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and "error" in body:
        return str(body["error"])
    return f"HTTP {response.status_code}"


class PathfinderClient(NetworkClient):
    """Remote counterpart of hexnav.Pathfinder."""

    def is_valid_position(self, x: float, z: float) -> Optional[bool]:
        result = self.post_with_retry("/api/valid_position", {"x": x, "z": z})
        return None if result is None else result["valid"]

    def clamp_to_hexagon(self, x: float, z: float) -> Optional[Tuple[float, float]]:
        result = self.post_with_retry("/api/clamp", {"x": x, "z": z})
        return None if result is None else (result["x"], result["z"])

    def set_obstacle(self, x: float, z: float, radius: float) -> Optional[int]:
        result = self.post_with_retry("/api/obstacle", {"x": x, "z": z, "radius": radius})
        return None if result is None else result["blocked_cells"]

    def find_path(self, start, end) -> List[Tuple[float, float, float]]:
        """Server route, or the direct path [end] when the server is unreachable or refuses the request."""
        result = self.post_with_retry("/api/find_path", {"start": list(start), "end": list(end)})
        if result is None:
            if self.last_error is None:
                logger.warning("Navigation server offline, moving directly to %s", tuple(end))
            return [tuple(end)]
        return [tuple(p) for p in result["path"]]
