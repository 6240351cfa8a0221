"""HTTP client for the OSRM route service."""

from __future__ import annotations

import logging
from typing import Sequence

import httpx

from ...config import settings
from .errors import RoutingProviderError

logger = logging.getLogger(__name__)


class OSRMClient:
    def __init__(
        self,
        base_url: str | None = None,
        profile: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.osrm_base_url).rstrip("/")
        if not self.base_url:
            raise ValueError("OSRM base URL is not configured.")
        self.profile = profile or settings.osrm_profile
        self.timeout = timeout if timeout is not None else settings.osrm_timeout_seconds
        self._transport = transport

    def _get_client(self, timeout: float) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(timeout, connect=min(timeout, 10.0)),
            transport=self._transport,
        )

    def route_url(self, coordinates: Sequence[tuple[float, float]]) -> str:
        # OSRM expects "lon,lat;lon,lat;..."
        coordinate_str = ";".join(f"{lon},{lat}" for lat, lon in coordinates)
        return f"{self.base_url}/route/v1/{self.profile}/{coordinate_str}"

    def route(self, coordinates: Sequence[tuple[float, float]], timeout: float | None = None) -> dict:
        """Fetch a drivable route through ``coordinates`` in the given order.

        Args:
            coordinates: Sequence of (lat, lon) tuples, origin first
            timeout: Per-request timeout in seconds, defaults to the client timeout

        Returns:
            The decoded OSRM response, guaranteed to have ``code == "Ok"`` and
            at least one entry in ``routes``.

        Raises:
            RoutingProviderError: on transport errors, non-2xx status, a code other
            than "Ok", or an empty route list. Nothing is retried.
        """
        if len(coordinates) < 2:
            raise ValueError("At least two coordinates are required for OSRM route.")

        params = {
            "overview": "full",
            "geometries": "geojson",
            "steps": "true",
        }
        url = self.route_url(coordinates)
        effective_timeout = timeout if timeout is not None else self.timeout

        client = self._get_client(effective_timeout)
        try:
            try:
                response = client.get(url, params=params)
            except httpx.TimeoutException as exc:
                logger.warning(f"OSRM route request timed out after {effective_timeout}s: {exc}")
                raise RoutingProviderError(
                    f"OSRM route request timed out after {effective_timeout}s", timed_out=True
                ) from exc
            except httpx.HTTPError as exc:
                raise RoutingProviderError(
                    f"Failed to connect to OSRM service at {self.base_url}: {exc}"
                ) from exc

            data = _decode_json(response)
            if response.is_error:
                message = data.get("message") if data else None
                raise RoutingProviderError(
                    message or f"OSRM route request failed with HTTP {response.status_code}",
                    status_code=response.status_code,
                )
            if data is None:
                raise RoutingProviderError("OSRM returned a response that is not JSON.", status_code=response.status_code)

            if data.get("code") != "Ok":
                error_msg = data.get("message") or data.get("code") or "Unknown OSRM route error"
                raise RoutingProviderError(f"OSRM route request failed: {error_msg}", status_code=response.status_code)
            if not data.get("routes"):
                raise RoutingProviderError("OSRM found no route between the requested points.", status_code=response.status_code)
            return data
        finally:
            client.close()


def _decode_json(response: httpx.Response) -> dict | None:
    try:
        payload = response.json()
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def check_health(base_url: str | None = None, transport: httpx.BaseTransport | None = None) -> bool:
    """Check OSRM availability with a two-point route request.

    Public OSRM endpoints have no /health endpoint, so a minimal route over two
    nearby coordinates (central São Paulo) stands in for one.
    """
    try:
        client = OSRMClient(base_url=base_url, timeout=5.0, transport=transport)
        client.route([(-23.550520, -46.633308), (-23.561414, -46.655881)])
        return True
    except (RoutingProviderError, ValueError) as exc:
        logger.warning(f"OSRM health check failed: {exc}")
        return False
