"""Application service: Show Sale use case (query)."""

from __future__ import annotations

from grocer.application.dto import SaleDTO, to_sale_dto
from grocer.domain.exceptions import EntityNotFoundError
from grocer.domain.service.sale_ledger import SaleLedger
from grocer.domain.store.client_registry import ClientRegistry


class ShowSaleHandler:

    def __init__(self, ledger: SaleLedger, clients: ClientRegistry) -> None:
        self._ledger = ledger
        self._clients = clients

    def handle(self, sale_id: int) -> SaleDTO:
        sale = self._ledger.get_by_id(sale_id).unwrap()
        if sale is None:
            raise EntityNotFoundError(f"Sale #{sale_id} not found")
        owner = self._clients.owner_of(sale)
        return to_sale_dto(sale, client_name=owner.name if owner else None)
