from __future__ import annotations

import itertools
from typing import Any, Hashable

from .models import Client


class ConnectionRegistry:
    """Maps open channels to the Client record issued for them.

    Ids come from a monotonic counter and are never handed out twice, not even
    after the owning channel closes.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._clients: dict[Hashable, Client] = {}

    def register(self, channel: Hashable) -> Client:
        client = Client(id=next(self._ids), channel=channel)
        self._clients[channel] = client
        return client

    def unregister(self, channel: Hashable) -> Client | None:
        return self._clients.pop(channel, None)

    def lookup(self, channel: Any) -> Client | None:
        return self._clients.get(channel)

    def is_open(self, channel: Any) -> bool:
        return channel in self._clients

    def __len__(self) -> int:
        return len(self._clients)
