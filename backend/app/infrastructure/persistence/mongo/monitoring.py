"""Bridges pymongo topology events into connection availability callbacks."""
from __future__ import annotations

from typing import Any, Callable

from pymongo import ReadPreference, monitoring


def _first_server_error(description: Any) -> str | None:
    for server in description.server_descriptions().values():
        if server.error is not None:
            return str(server.error)
    return None


class TopologyStateBridge(monitoring.TopologyListener):
    """Reports whether any member of the deployment answers; runs on the driver's monitor threads.

    Available means at least one member is readable; one unreachable replica-set
    member leaves the deployment available.
    """

    def __init__(self, *, on_change: Callable[[bool, str | None], None]) -> None:
        self._on_change = on_change

    def opened(self, event: monitoring.TopologyOpenedEvent) -> None:
        return

    def description_changed(self, event: monitoring.TopologyDescriptionChangedEvent) -> None:
        description = event.new_description
        available = description.has_readable_server(ReadPreference.NEAREST)
        self._on_change(available, None if available else _first_server_error(description))

    def closed(self, event: monitoring.TopologyClosedEvent) -> None:
        return
