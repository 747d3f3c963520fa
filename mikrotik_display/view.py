"""View state of the configuration page."""

from __future__ import annotations

from dataclasses import dataclass, field

from .const import (
    BACKLIGHT_MAX,
    BACKLIGHT_MIN,
    DEFAULT_BACKLIGHT,
    DEFAULT_IP_TEXT,
    DEFAULT_MAX_MBPS,
    DEFAULT_MIN_MBPS,
    DEFAULT_STAT_TEXT,
    PLACEHOLDER_INTERFACE_INITIAL,
    PLACEHOLDER_SSID_INITIAL,
    SCAN_LABEL,
    SECTION_GRAPH,
    SECTION_ROUTER,
    SECTION_WIFI,
    STAT_FIELDS,
    THEME_ICONS,
    THEME_LIGHT,
)


@dataclass
class SelectOption:
    """Single <option> of a selector."""

    value: str
    label: str
    selected: bool = False


@dataclass
class Selector:
    """Single-choice selector.

    Like a browser select, at most one option is selected and the value
    falls back to the first option when none is.
    """

    options: list[SelectOption] = field(default_factory=list)

    @classmethod
    def with_placeholder(cls, label: str) -> Selector:  # noqa: D102
        return cls(options=[SelectOption("", label)])

    def replace(self, options: list[SelectOption]) -> None:
        """Replace all options."""
        self.options = []
        for option in options:
            self.append(option)

    def append(self, option: SelectOption) -> None:
        """Add option, making it the only selected one if marked."""
        if option.selected:
            for other in self.options:
                other.selected = False
        self.options.append(option)

    def select(self, value: str) -> bool:
        """Select option by value. Return False if there is none."""
        for option in self.options:
            if option.value == value:
                self._mark_selected(option)
                return True
        return False

    def _mark_selected(self, option: SelectOption) -> None:
        for other in self.options:
            other.selected = other is option

    @property
    def selected(self) -> SelectOption | None:  # noqa: D102
        for option in self.options:
            if option.selected:
                return option
        return self.options[0] if self.options else None

    @property
    def value(self) -> str:  # noqa: D102
        option = self.selected
        return option.value if option else ""

    @property
    def labels(self) -> list[str]:  # noqa: D102
        return [option.label for option in self.options]


@dataclass
class Slider:
    """Range input; the control itself keeps the value within bounds."""

    value: int = DEFAULT_BACKLIGHT
    minimum: int = BACKLIGHT_MIN
    maximum: int = BACKLIGHT_MAX

    def set(self, value: int) -> int:
        """Set clamped value and return it."""
        self.value = max(self.minimum, min(self.maximum, int(value)))
        return self.value

    @property
    def display(self) -> str:
        """Percentage shown next to the slider."""
        return str(self.value)

    @property
    def fill(self) -> str:
        """Filled part of the track."""
        return f"{self.value}%"


@dataclass
class Alert:
    """Inline alert area of a form."""

    text: str = ""
    visible: bool = False
    error: bool = False

    def show(self, text: str, error: bool = False) -> None:  # noqa: D102
        self.text = text
        self.visible = True
        self.error = error

    @property
    def css_class(self) -> str:  # noqa: D102
        classes = ["alert"]
        if self.visible:
            classes.append("show")
        if self.error:
            classes.append("error")
        return " ".join(classes)


@dataclass
class ScanButton:
    """Scan trigger button."""

    label: str = SCAN_LABEL
    disabled: bool = False


@dataclass
class TelemetryPanel:
    """Live statistics readouts and the IP badge."""

    cpu: str = DEFAULT_STAT_TEXT
    ram: str = DEFAULT_STAT_TEXT
    rx: str = DEFAULT_STAT_TEXT
    tx: str = DEFAULT_STAT_TEXT
    ip_badge: str = DEFAULT_IP_TEXT

    def mark_unavailable(self, marker: str) -> None:  # noqa: D102
        for name in STAT_FIELDS:
            setattr(self, name, marker)


@dataclass
class ThemeState:
    """Page theme attribute and toggle glyph."""

    theme: str = THEME_LIGHT

    @property
    def icon(self) -> str:  # noqa: D102
        return THEME_ICONS.get(self.theme, THEME_ICONS[THEME_LIGHT])


def _default_fields() -> dict[str, str]:
    return {
        "password": "",
        "router_addr": "",
        "router_user": "",
        "router_pass": "",
        "min_mbps": DEFAULT_MIN_MBPS,
        "max_mbps": DEFAULT_MAX_MBPS,
    }


def _default_alerts() -> dict[str, Alert]:
    return {
        SECTION_WIFI: Alert(),
        SECTION_ROUTER: Alert(),
        SECTION_GRAPH: Alert(),
    }


@dataclass
class ViewState:
    """Everything the page renders, owned by one client."""

    ssid_select: Selector = field(
        default_factory=lambda: Selector.with_placeholder(PLACEHOLDER_SSID_INITIAL)
    )
    interface_select: Selector = field(
        default_factory=lambda: Selector.with_placeholder(
            PLACEHOLDER_INTERFACE_INITIAL
        )
    )
    fields: dict[str, str] = field(default_factory=_default_fields)
    backlight: Slider = field(default_factory=Slider)
    scan_button: ScanButton = field(default_factory=ScanButton)
    telemetry: TelemetryPanel = field(default_factory=TelemetryPanel)
    theme: ThemeState = field(default_factory=ThemeState)
    alerts: dict[str, Alert] = field(default_factory=_default_alerts)
    # Blocking alert() messages, oldest first
    notifications: list[str] = field(default_factory=list)
