"""Client for the Mikrotik Display configuration page."""

from .api import MikrotikDisplayAPI
from .client import ClientOptions, ConfigSyncClient, OperationResult
from .exceptions import (
    CannotConnect,
    FormInvalid,
    InvalidResponse,
    MikrotikDisplayError,
    SaveFailed,
)
from .storage import PreferenceStore
from .view import ViewState

__all__ = [
    "CannotConnect",
    "ClientOptions",
    "ConfigSyncClient",
    "FormInvalid",
    "InvalidResponse",
    "MikrotikDisplayAPI",
    "MikrotikDisplayError",
    "OperationResult",
    "PreferenceStore",
    "SaveFailed",
    "ViewState",
]
