# noqa: D100

import datetime

CONNECTION_TIMEOUT = 30

DEFAULT_HOST = "192.168.4.1"
DEFAULT_PORT = 80

STATS_UPDATE_INTERVAL = datetime.timedelta(seconds=5)

# Device endpoints
URL_CONFIG = "/api/config"
URL_INTERFACES = "/api/interfaces"
URL_SCAN = "/api/scan"
URL_STATS = "/api/stats"
URL_THEME = "/api/theme"
URL_BACKLIGHT = "/api/backlight"
URL_SAVE_WIFI = "/save-wifi"
URL_SAVE_ROUTER = "/save-router"
URL_SAVE_GRAPH = "/save-graph"
URL_UPDATE = "/update"

SECTION_WIFI = "wifi"
SECTION_ROUTER = "router"
SECTION_GRAPH = "graph"

THEME_LIGHT = "light"
THEME_DARK = "dark"
THEMES = (THEME_LIGHT, THEME_DARK)
THEME_ICONS = {THEME_LIGHT: "🌙", THEME_DARK: "☀️"}

PREF_THEME = "theme"

BACKLIGHT_MIN = 0
BACKLIGHT_MAX = 100

MBPS_LIMIT = 10000

# Markup defaults
DEFAULT_BACKLIGHT = 100
DEFAULT_MIN_MBPS = "0"
DEFAULT_MAX_MBPS = "480"
DEFAULT_STAT_TEXT = "--"
DEFAULT_IP_TEXT = "IP: Loading..."

STAT_NOT_AVAILABLE = "N/A"
STAT_FIELDS = ("cpu", "ram", "rx", "tx")

PLACEHOLDER_SSID_INITIAL = "Click 'Scan WiFi Networks' first"
PLACEHOLDER_SSID = "Select a network"
PLACEHOLDER_NO_NETWORKS = "No networks found"
PLACEHOLDER_INTERFACE_INITIAL = "Loading interfaces..."
PLACEHOLDER_INTERFACE = "Select interface"

SCAN_LABEL = "📡 Scan WiFi Networks"
SCAN_LABEL_BUSY = "Scanning..."
SCAN_FAILED_ALERT = "WiFi scan failed. Please try again."

SAVE_FAILED = "Save failed"

SECTION_MESSAGES = {
    SECTION_WIFI: (
        "Saving WiFi configuration...",
        "✓ WiFi configuration saved! Device restarting...",
    ),
    SECTION_ROUTER: (
        "Saving router configuration...",
        "✓ Router configuration saved! Device restarting...",
    ),
    SECTION_GRAPH: (
        "Saving graph settings...",
        "✓ Graph settings saved! Device restarting...",
    ),
}

ERROR_CANNOT_CONNECT = "cannot_connect"
ERROR_INVALID_RESPONSE = "invalid_response"
ERROR_SAVE_FAILED = "save_failed"
ERROR_INVALID_FORM = "invalid_form"
ERROR_SUPERSEDED = "superseded"
ERROR_UNKNOWN = "unknown"
