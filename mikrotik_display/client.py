"""Keep the configuration page in sync with a Mikrotik Display."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
import datetime
from functools import partial
import logging
from typing import Any

import aiohttp

from .api import MikrotikDisplayAPI
from .const import (
    CONNECTION_TIMEOUT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ERROR_SUPERSEDED,
    PLACEHOLDER_INTERFACE,
    PLACEHOLDER_NO_NETWORKS,
    PLACEHOLDER_SSID,
    PREF_THEME,
    SCAN_FAILED_ALERT,
    SCAN_LABEL_BUSY,
    SECTION_GRAPH,
    SECTION_MESSAGES,
    SECTION_ROUTER,
    SECTION_WIFI,
    STAT_NOT_AVAILABLE,
    STATS_UPDATE_INTERVAL,
    THEME_DARK,
    THEME_LIGHT,
    THEMES,
)
from .exceptions import (
    CannotConnect,
    FormInvalid,
    InvalidResponse,
    MikrotikDisplayError,
    SaveFailed,
)
from .forms import SECTION_SCHEMAS, serialize_form, validate_form
from .models import (
    DeviceConfig,
    TelemetrySample,
    format_value,
    normalize_identifier,
    parse_interfaces,
    parse_networks,
)
from .storage import PreferenceStore
from .view import SelectOption, ViewState

_LOGGER = logging.getLogger(__name__)


@dataclass
class ClientOptions:
    """Tunables of a sync client."""

    timeout: float = CONNECTION_TIMEOUT
    stats_interval: datetime.timedelta = STATS_UPDATE_INTERVAL
    # Trailing-edge delay for backlight requests, 0 sends every change
    backlight_debounce: float = 0.0


@dataclass
class OperationResult:
    """Outcome of one client operation."""

    ok: bool
    data: Any = None
    error_code: str | None = None
    message: str | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def failure(cls, ex: MikrotikDisplayError) -> OperationResult:  # noqa: D102
        return cls(
            ok=False,
            error_code=ex.error_code,
            message=ex.message,
            errors=getattr(ex, "errors", {})
        )


class ConfigSyncClient:
    """Configuration page client of a Mikrotik Display.

    Loads the device state into ``view``, relays edits back to the device
    and refreshes telemetry while started. Scan, interface listing, config
    load and telemetry refresh are single-flight: a call made while another
    of the same kind is outstanding waits for that one instead of issuing a
    second request.

    Must be created while an event loop is running.
    """

    def __init__(  # noqa: D107
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        scheme: str = "http",
        options: ClientOptions | None = None,
        store: PreferenceStore | None = None,
        on_alert: Callable[[str], None] | None = None,
        api: MikrotikDisplayAPI | None = None
    ) -> None:
        self.options = options or ClientOptions()
        self.store = store if store is not None else PreferenceStore()
        self.api = api or MikrotikDisplayAPI(
            host=host,
            port=port,
            scheme=scheme,
            timeout=self.options.timeout
        )
        self.view = ViewState()
        self._on_alert = on_alert

        cached = self.store.get(PREF_THEME)
        self.view.theme.theme = cached if cached in THEMES else THEME_LIGHT

        self._in_flight: dict[str, asyncio.Task] = {}
        self._tasks: set[asyncio.Task] = set()
        self._poll_task: asyncio.Task | None = None
        self._backlight_seq = 0


    async def __aenter__(self) -> ConfigSyncClient:
        await self.start()
        return self


    async def __aexit__(self, *exc_info) -> None:
        await self.close()


    @property
    def update_portal_url(self) -> str:
        """OTA firmware update portal, served by the device separately."""
        return self.api.update_portal_url


    async def start(self) -> None:
        """Load configuration and start telemetry polling."""
        if self._poll_task is not None:
            return
        self._spawn(self.load_initial_config())
        self._poll_task = asyncio.create_task(self._poll_stats())


    async def close(self) -> None:
        """Stop polling, drop pending requests and close session."""
        pending = [*self._tasks, *self._in_flight.values()]
        if self._poll_task is not None:
            pending.append(self._poll_task)
            self._poll_task = None
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._tasks.clear()
        self._in_flight.clear()
        await self.api.close()


    def _spawn(self, coro: Awaitable) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task


    async def _single_flight(self, key: str, func: Callable, *args) -> Any:
        task = self._in_flight.get(key)
        if task is None or task.done():
            task = asyncio.create_task(func(*args))
            self._in_flight[key] = task
            task.add_done_callback(partial(self._flight_done, key))
        else:
            _LOGGER.debug("Joining outstanding %s request", key)
        return await asyncio.shield(task)


    def _flight_done(self, key: str, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]


    async def _poll_stats(self) -> None:
        interval = self.options.stats_interval.total_seconds()
        while True:
            self._spawn(self.refresh_telemetry())
            await asyncio.sleep(interval)


    async def _fetch_data(self, api_func: Callable, save: bool = False,
                          **kwargs) -> Any:
        try:
            return await api_func(**kwargs)
        except aiohttp.ClientResponseError as ex:
            if save:
                raise SaveFailed(ex.status) from ex
            raise InvalidResponse(
                f"Failed to fetch data from {self.api.base_url}: "
                f"HTTP {ex.status}"
            ) from ex
        except (aiohttp.ClientError, TimeoutError) as ex:
            raise CannotConnect(str(ex) or type(ex).__name__) from ex


    async def _fetch_object(self, api_func: Callable, **kwargs) -> dict:
        data = await self._fetch_data(api_func, **kwargs)
        if not isinstance(data, dict):
            raise InvalidResponse(
                f"Expected JSON object from {self.api.base_url}, "
                f"got {type(data).__name__}"
            )
        return data


    def _notify(self, message: str) -> None:
        self.view.notifications.append(message)
        if self._on_alert is not None:
            self._on_alert(message)


    async def load_initial_config(self) -> OperationResult:
        """Fetch device configuration into the form fields."""
        return await self._single_flight("config", self._load_initial_config)


    async def _load_initial_config(self) -> OperationResult:
        try:
            data = await self._fetch_object(self.api.get_config)
        except MikrotikDisplayError as ex:
            _LOGGER.error("Config load failed: %s", ex)
            return OperationResult.failure(ex)

        config = DeviceConfig.from_dict(data)
        self._apply_config(config)
        await self.load_interfaces(config.interface_id)
        return OperationResult(ok=True, data=config)


    def _apply_config(self, config: DeviceConfig) -> None:
        view = self.view
        if config.ssid:
            view.ssid_select.append(SelectOption(
                config.ssid, f"{config.ssid} (current)", selected=True
            ))
        if config.router_addr:
            view.fields["router_addr"] = config.router_addr
        if config.router_user:
            view.fields["router_user"] = config.router_user
        if config.max_mbps is not None:
            view.fields["max_mbps"] = format_value(config.max_mbps)
        if config.min_mbps is not None:
            view.fields["min_mbps"] = format_value(config.min_mbps)
        if config.backlight is not None:
            try:
                view.backlight.set(config.backlight)
            except (TypeError, ValueError):
                _LOGGER.warning("Ignoring backlight value %r", config.backlight)
        if config.theme:
            if config.theme in THEMES:
                self._apply_theme(config.theme)
            else:
                _LOGGER.warning("Ignoring unknown theme %r", config.theme)
        if config.ip:
            view.telemetry.ip_badge = f"IP: {config.ip}"


    async def load_interfaces(self, selected_id: Any = None) -> OperationResult:
        """Fetch router interfaces, preselecting ``selected_id``."""
        wanted = normalize_identifier(selected_id)
        return await self._single_flight(
            f"interfaces:{wanted}", self._load_interfaces, wanted
        )


    async def _load_interfaces(self, wanted: str | None) -> OperationResult:
        try:
            interfaces = parse_interfaces(
                await self._fetch_object(self.api.get_interfaces)
            )
        except MikrotikDisplayError as ex:
            _LOGGER.error("Interface load failed: %s", ex)
            return OperationResult.failure(ex)

        options = [SelectOption("", PLACEHOLDER_INTERFACE)]
        for iface in interfaces:
            options.append(SelectOption(
                iface.id,
                iface.label,
                # 0 is a valid id, only a missing one selects nothing
                selected=wanted is not None
                and normalize_identifier(iface.id) == wanted
            ))
        self.view.interface_select.replace(options)
        return OperationResult(ok=True, data=interfaces)


    async def scan_networks(self) -> OperationResult:
        """Scan WiFi networks into the SSID selector."""
        return await self._single_flight("scan", self._scan_networks)


    async def _scan_networks(self) -> OperationResult:
        button = self.view.scan_button
        original_label = button.label
        button.label = SCAN_LABEL_BUSY
        button.disabled = True

        error = None
        try:
            networks = parse_networks(
                await self._fetch_object(self.api.scan_networks)
            )
            if networks:
                self.view.ssid_select.replace(
                    [SelectOption("", PLACEHOLDER_SSID)]
                    + [SelectOption(net.ssid, net.label) for net in networks]
                )
            else:
                self.view.ssid_select.replace(
                    [SelectOption("", PLACEHOLDER_NO_NETWORKS)]
                )
        except MikrotikDisplayError as ex:
            error = ex
        finally:
            button.label = original_label
            button.disabled = False

        if error is not None:
            _LOGGER.error("WiFi scan failed: %s", error)
            self._notify(SCAN_FAILED_ALERT)
            return OperationResult.failure(error)
        return OperationResult(ok=True, data=networks)


    async def refresh_telemetry(self) -> OperationResult:
        """Fetch one statistics sample into the readouts."""
        return await self._single_flight("stats", self._refresh_telemetry)


    async def _refresh_telemetry(self) -> OperationResult:
        panel = self.view.telemetry
        try:
            data = await self._fetch_object(self.api.get_stats)
        except MikrotikDisplayError as ex:
            _LOGGER.warning("Stats fetch failed: %s", ex)
            panel.mark_unavailable(STAT_NOT_AVAILABLE)
            return OperationResult.failure(ex)

        sample = TelemetrySample.from_dict(data)
        if sample.cpu is not None:
            panel.cpu = f"{format_value(sample.cpu)}%"
        if sample.ram is not None:
            panel.ram = format_value(sample.ram)
        if sample.rx is not None:
            panel.rx = f"{format_value(sample.rx)} Mbps"
        if sample.tx is not None:
            panel.tx = f"{format_value(sample.tx)} Mbps"
        if sample.ip:
            panel.ip_badge = f"IP: {sample.ip}"
        return OperationResult(ok=True, data=sample)


    def set_backlight(self, value: int) -> asyncio.Task:
        """Show new brightness at once and send it to the device.

        Returns the request task; its result is an OperationResult.
        """
        level = self.view.backlight.set(value)
        self._backlight_seq += 1
        return self._spawn(self._send_backlight(level, self._backlight_seq))


    async def _send_backlight(self, level: int, seq: int) -> OperationResult:
        if self.options.backlight_debounce > 0:
            await asyncio.sleep(self.options.backlight_debounce)
            if seq != self._backlight_seq:
                return OperationResult(ok=False, error_code=ERROR_SUPERSEDED)
        try:
            await self._fetch_data(self.api.set_backlight, brightness=level)
        except MikrotikDisplayError as ex:
            _LOGGER.error("Backlight update failed: %s", ex)
            return OperationResult.failure(ex)
        return OperationResult(ok=True, data=level)


    def _apply_theme(self, theme: str) -> None:
        self.view.theme.theme = theme
        self.store.set(PREF_THEME, theme)


    def set_theme(self, theme: str) -> asyncio.Task:
        """Apply theme locally and persist it on the device."""
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme}")
        self._apply_theme(theme)
        return self._spawn(self._send_theme(theme))


    def toggle_theme(self) -> asyncio.Task:
        """Flip between light and dark theme."""
        current = self.view.theme.theme
        return self.set_theme(THEME_LIGHT if current == THEME_DARK else THEME_DARK)


    async def _send_theme(self, theme: str) -> OperationResult:
        try:
            await self._fetch_data(self.api.set_theme, theme=theme)
        except MikrotikDisplayError as ex:
            _LOGGER.error("Theme save failed: %s", ex)
            return OperationResult.failure(ex)
        return OperationResult(ok=True, data=theme)


    def set_field(self, name: str, value: str) -> None:
        """Type into a text input."""
        if name not in self.view.fields:
            raise ValueError(f"Unknown field: {name}")
        self.view.fields[name] = str(value)


    def select_network(self, ssid: str) -> bool:
        """Pick a network in the SSID selector."""
        return self.view.ssid_select.select(ssid)


    def select_interface(self, interface_id: Any) -> bool:
        """Pick an interface by id, in any representation."""
        wanted = normalize_identifier(interface_id)
        if wanted is None:
            return False
        for option in self.view.interface_select.options:
            if normalize_identifier(option.value) == wanted:
                return self.view.interface_select.select(option.value)
        return False


    async def save_section(self, section: str) -> OperationResult:
        """Submit one of the wifi, router or graph forms."""
        savers = {
            SECTION_WIFI: self.api.save_wifi,
            SECTION_ROUTER: self.api.save_router,
            SECTION_GRAPH: self.api.save_graph,
        }
        if section not in SECTION_SCHEMAS:
            raise ValueError(f"Unknown section: {section}")

        payload = serialize_form(self.view, section)
        try:
            validate_form(section, payload)
        except FormInvalid as ex:
            _LOGGER.warning("Not submitting %s form: %s", section, ex.errors)
            return OperationResult.failure(ex)

        alert = self.view.alerts[section]
        in_progress, saved = SECTION_MESSAGES[section]
        alert.show(in_progress)
        try:
            await self._fetch_data(savers[section], save=True, params=payload)
        except MikrotikDisplayError as ex:
            _LOGGER.error("Saving %s settings failed: %s", section, ex)
            alert.show(f"✗ Error: {ex.message}", error=True)
            return OperationResult.failure(ex)

        _LOGGER.info("Saved %s settings, device restarting", section)
        alert.show(saved)
        return OperationResult(ok=True, data=payload)
