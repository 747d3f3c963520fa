"""Save section forms."""

import logging

import voluptuous as vol

from .const import MBPS_LIMIT, SECTION_GRAPH, SECTION_ROUTER, SECTION_WIFI
from .exceptions import FormInvalid
from .view import ViewState

_LOGGER = logging.getLogger(__name__)

# Fields whose value comes from a selector rather than a text input
SELECTOR_FIELDS = {
    "ssid": "ssid_select",
    "interface_id": "interface_select",
}

_required_text = vol.All(str, vol.Length(min=1))


def _mbps(minimum: int) -> vol.All:
    return vol.All(
        vol.Coerce(int),
        vol.Range(min=minimum, max=MBPS_LIMIT)
    )


# Mirrors the page markup constraints: every field required, number
# inputs bounded. min_mbps < max_mbps is left to the device.
SECTION_SCHEMAS = {
    SECTION_WIFI: vol.Schema({
        vol.Required("ssid"): _required_text,
        vol.Required("password"): _required_text,
    }),
    SECTION_ROUTER: vol.Schema({
        vol.Required("router_addr"): _required_text,
        vol.Required("router_user"): _required_text,
        vol.Required("router_pass"): _required_text,
        vol.Required("interface_id"): _required_text,
    }),
    SECTION_GRAPH: vol.Schema({
        vol.Required("min_mbps"): _required_text,
        vol.Required("max_mbps"): _required_text,
    }),
}

_NUMBER_SCHEMAS = {
    "min_mbps": _mbps(0),
    "max_mbps": _mbps(1),
}


def section_fields(section: str) -> list[str]:
    """Return named fields of a section in form order."""
    return [str(key) for key in SECTION_SCHEMAS[section].schema]


def serialize_form(view: ViewState, section: str) -> dict[str, str]:
    """Collect a section's named fields into a flat payload."""
    payload = {}
    for name in section_fields(section):
        if name in SELECTOR_FIELDS:
            payload[name] = getattr(view, SELECTOR_FIELDS[name]).value
        else:
            payload[name] = view.fields.get(name, "")
    return payload


def validate_form(section: str, payload: dict[str, str]) -> dict[str, str]:
    """Check payload against the section constraints.

    Returns the payload unchanged; values stay strings, as a browser
    submits them.
    """
    errors: dict[str, str] = {}
    try:
        SECTION_SCHEMAS[section](payload)
    except vol.MultipleInvalid as ex:
        for error in ex.errors:
            errors[str(error.path[0]) if error.path else "base"] = error.msg

    for name, schema in _NUMBER_SCHEMAS.items():
        if name in payload and name not in errors:
            try:
                schema(payload[name])
            except vol.Invalid as ex:
                errors[name] = ex.msg

    if errors:
        _LOGGER.debug("Form %s rejected: %s", section, errors)
        raise FormInvalid(section, errors)
    return payload
