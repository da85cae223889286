"""Backend-level constants shared across modules."""
from __future__ import annotations

from enum import Enum

EXIT_FATAL_STARTUP = 1

DEFAULT_MONGO_PORT = 27017


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERROR = "error"
    DISCONNECTED = "disconnected"
    RECONNECTED = "reconnected"


class FailureCategory(str, Enum):
    AUTHENTICATION = "authentication"
    NETWORK = "network"
    TIMEOUT = "timeout"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


FAILURE_HINTS: dict[FailureCategory, str] = {
    FailureCategory.AUTHENTICATION: "Authentication error: check the database username and password",
    FailureCategory.NETWORK: "Network error: check connectivity and the cluster IP allow list",
    FailureCategory.TIMEOUT: "Timeout error: no reachable server within the selection timeout",
    FailureCategory.CONFIGURATION: "Configuration error: the connection URI is malformed or cannot be resolved",
    FailureCategory.UNKNOWN: "Unexpected error while connecting to the database",
}


class ContactStatus:
    NEW = "new"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
