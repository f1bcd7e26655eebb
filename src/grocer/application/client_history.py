"""Application service: Client Order History use case (query)."""

from __future__ import annotations

from grocer.application.dto import SaleDTO, to_sale_dto
from grocer.domain.store.client_registry import ClientRegistry


class ClientHistoryHandler:

    def __init__(self, clients: ClientRegistry) -> None:
        self._clients = clients

    def handle(self, client_id: int) -> list[SaleDTO]:
        """Return the client's sales in the order they were made."""
        history = self._clients.history_of(client_id).unwrap()
        client = self._clients.find_by_id(client_id).unwrap()
        return [to_sale_dto(s, client_name=client.name) for s in history]
