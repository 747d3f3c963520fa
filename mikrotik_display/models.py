"""Data models for Mikrotik Display responses."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any

_LOGGER = logging.getLogger(__name__)


def normalize_identifier(value: Any) -> str | None:
    """Return canonical string form of an interface identifier.

    Integers and integer-like strings map to the same value so that
    ``7`` and ``"7"`` compare equal. ``None`` and blank strings mean no
    identifier.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        return str(int(text))
    except ValueError:
        return text


def format_value(value: Any) -> str:
    """Render a JSON scalar the way the page prints it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _present(data: dict, key: str) -> bool:
    # Strings count only when non-empty, numbers whenever not null
    value = data.get(key)
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    return True


@dataclass
class DeviceConfig:
    """Configuration snapshot from /api/config."""

    ssid: str | None = None
    router_addr: str | None = None
    router_user: str | None = None
    interface_id: str | None = None
    min_mbps: int | None = None
    max_mbps: int | None = None
    backlight: int | None = None
    theme: str | None = None
    ip: str | None = None

    @classmethod
    def from_dict(cls, data: dict | None) -> DeviceConfig:
        """Build from response, keeping only present fields."""
        data = data or {}
        values = {
            key: data[key]
            for key in (
                "ssid", "router_addr", "router_user", "min_mbps",
                "max_mbps", "backlight", "theme", "ip",
            )
            if _present(data, key)
        }
        return cls(
            interface_id=normalize_identifier(data.get("interface_id")),
            **values
        )


@dataclass
class NetworkEntry:
    """WiFi network from a scan."""

    ssid: str
    strength: str = ""
    rssi: int | None = None

    @property
    def label(self) -> str:  # noqa: D102
        return f"{self.ssid} ({self.strength} {format_value(self.rssi)}dBm)"

    @classmethod
    def from_dict(cls, data: dict) -> NetworkEntry:  # noqa: D102
        return cls(
            ssid=data.get("ssid", ""),
            strength=data.get("strength", ""),
            rssi=data.get("rssi")
        )


@dataclass
class InterfaceEntry:
    """Router interface the display can monitor."""

    id: str
    name: str

    @property
    def label(self) -> str:  # noqa: D102
        return f"{self.name} (ID: {self.id})"

    @classmethod
    def from_dict(cls, data: dict) -> InterfaceEntry:  # noqa: D102
        return cls(
            id=format_value(data.get("id", "")),
            name=data.get("name", "")
        )


@dataclass
class TelemetrySample:
    """Live statistics sample from /api/stats."""

    cpu: Any = None
    ram: Any = None
    rx: Any = None
    tx: Any = None
    ip: str | None = None
    missing: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None) -> TelemetrySample:  # noqa: D102
        data = data or {}
        missing = [
            key for key in ("cpu", "ram", "rx", "tx") if data.get(key) is None
        ]
        if missing:
            _LOGGER.debug("Stats sample without %s", missing)
        return cls(
            cpu=data.get("cpu"),
            ram=data.get("ram"),
            rx=data.get("rx"),
            tx=data.get("tx"),
            ip=data.get("ip") or None,
            missing=missing
        )


def parse_networks(data: dict | None) -> list[NetworkEntry]:
    """Parse /api/scan response."""
    return [
        NetworkEntry.from_dict(el)
        for el in (data or {}).get("networks") or []
        if isinstance(el, dict)
    ]


def parse_interfaces(data: dict | None) -> list[InterfaceEntry]:
    """Parse /api/interfaces response."""
    return [
        InterfaceEntry.from_dict(el)
        for el in (data or {}).get("interfaces") or []
        if isinstance(el, dict)
    ]
