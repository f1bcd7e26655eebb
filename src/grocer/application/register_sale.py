"""Application service: Register Sale use case.

Resolves the buying client (if any) before the ledger touches stock,
then lets the SaleLedger validate and commit the whole sale.
"""

from __future__ import annotations

from datetime import date

from grocer.application.dto import SaleDTO, to_sale_dto
from grocer.domain.exceptions import EntityNotFoundError
from grocer.domain.model.sale import SaleItemSpec
from grocer.domain.service.sale_ledger import SaleLedger
from grocer.domain.store.client_registry import ClientRegistry


class RegisterSaleHandler:

    def __init__(self, ledger: SaleLedger, clients: ClientRegistry) -> None:
        self._ledger = ledger
        self._clients = clients

    def handle(
        self,
        item_specs: list[SaleItemSpec],
        sale_date: date | None = None,
        client_id: int | None = None,
    ) -> SaleDTO:
        """Register a sale, anonymous unless ``client_id`` is given.

        Steps:
        1. Check the client exists (a client sale for nobody is refused).
        2. Let the ledger validate every item and deduct stock.
        3. Return a DTO carrying any non-fatal warnings.
        """
        client_name = None
        if client_id is not None:
            client = self._clients.find_by_id(client_id).unwrap()
            if client is None:
                raise EntityNotFoundError(f"Client #{client_id} not found")
            client_name = client.name

        outcome = self._ledger.register_sale(
            item_specs,
            sale_date or date.today(),
            client_id=client_id,
        )
        sale = outcome.unwrap()
        return to_sale_dto(sale, client_name=client_name, warnings=outcome.warnings)
