"""Application service: Register Client use case."""

from __future__ import annotations

from grocer.domain.model.client import Client
from grocer.domain.store.client_registry import ClientRegistry


class RegisterClientHandler:

    def __init__(self, clients: ClientRegistry) -> None:
        self._clients = clients

    def handle(self, name: str) -> Client:
        client = Client.create(client_id=self._clients.next_id(), name=name)
        return self._clients.add(client).unwrap()
