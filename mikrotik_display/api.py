"""Mikrotik Display API client."""

import logging
from typing import Any

from aiohttp import ClientResponse, ClientResponseError, ClientSession, ClientTimeout

from .const import (
    CONNECTION_TIMEOUT,
    URL_BACKLIGHT,
    URL_CONFIG,
    URL_INTERFACES,
    URL_SAVE_GRAPH,
    URL_SAVE_ROUTER,
    URL_SAVE_WIFI,
    URL_SCAN,
    URL_STATS,
    URL_THEME,
    URL_UPDATE,
)
from .exceptions import InvalidResponse

_LOGGER = logging.getLogger(__name__)


def _raise_for_status(resp: ClientResponse) -> None:
    # Only 2xx counts as success; aiohttp's own check lets 3xx through.
    if not 200 <= resp.status < 300:
        raise ClientResponseError(
            resp.request_info,
            resp.history,
            status=resp.status,
            message=resp.reason or "",
            headers=resp.headers
        )


async def _read_json(resp: ClientResponse) -> Any:
    try:
        return await resp.json(content_type=None)
    except ValueError as ex:
        # JSONDecodeError and UnicodeDecodeError
        raise InvalidResponse(
            f"Invalid JSON from {resp.url}: {ex}"
        ) from ex


class MikrotikDisplayAPI:
    """API client for the Mikrotik Display configuration page.

    Must be created while an event loop is running, the aiohttp session is
    opened immediately.
    """

    def __init__(  # noqa: D107
        self,
        host: str,
        port: int = 80,
        scheme: str = "http",
        timeout: float = CONNECTION_TIMEOUT
    ) -> None:
        self.base_url = f"{scheme}://{host}:{port}"
        self._session = ClientSession(
            base_url=self.base_url,
            timeout=ClientTimeout(total=timeout)
        )


    @property
    def closed(self) -> bool:
        """Return True if the session is closed."""
        return self._session.closed


    async def close(self) -> None:
        """Close session."""
        await self._session.close()


    async def _get_data(self, url: str) -> Any:
        async with self._session.get(url=url) as resp:
            _raise_for_status(resp)
            return await _read_json(resp)


    async def _post_data(self, url: str, params: dict, parse: bool = True) -> Any:
        _LOGGER.debug("POST %s %s", url, list(params))
        async with self._session.post(url=url, json=params) as resp:
            _raise_for_status(resp)
            if parse:
                return await _read_json(resp)
            return None


    async def get_config(self) -> dict:
        """Get current device configuration."""
        return await self._get_data(URL_CONFIG)


    async def get_interfaces(self) -> dict:
        """Get router interfaces available for monitoring."""
        return await self._get_data(URL_INTERFACES)


    async def scan_networks(self) -> dict:
        """Scan for WiFi networks visible to the device."""
        return await self._get_data(URL_SCAN)


    async def get_stats(self) -> dict:
        """Get live telemetry sample."""
        return await self._get_data(URL_STATS)


    async def set_theme(self, theme: str) -> None:
        """Persist UI theme on the device."""
        await self._post_data(URL_THEME, {"theme": theme}, parse=False)


    async def set_backlight(self, brightness: int) -> None:
        """Apply display backlight level (0-100)."""
        await self._post_data(
            URL_BACKLIGHT, {"brightness": int(brightness)}, parse=False
        )


    async def save_wifi(self, params: dict) -> Any:
        """Save WiFi credentials. Device restarts afterwards."""
        return await self._post_data(URL_SAVE_WIFI, params)


    async def save_router(self, params: dict) -> Any:
        """Save router API credentials and monitored interface."""
        return await self._post_data(URL_SAVE_ROUTER, params)


    async def save_graph(self, params: dict) -> Any:
        """Save graph speed range."""
        return await self._post_data(URL_SAVE_GRAPH, params)


    @property
    def update_portal_url(self) -> str:
        """URL of the OTA firmware update portal."""
        return f"{self.base_url}{URL_UPDATE}"
