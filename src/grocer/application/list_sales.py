"""Application service: List Sales use case (query).

Lists every sale, or only those dated within an inclusive range.
"""

from __future__ import annotations

from datetime import date

from grocer.application.dto import SaleDTO, to_sale_dto
from grocer.domain.exceptions import ValidationError
from grocer.domain.service.sale_ledger import SaleLedger
from grocer.domain.store.client_registry import ClientRegistry


class ListSalesHandler:

    def __init__(self, ledger: SaleLedger, clients: ClientRegistry) -> None:
        self._ledger = ledger
        self._clients = clients

    def handle(self, start: date | None = None, end: date | None = None) -> list[SaleDTO]:
        if start is None and end is None:
            sales = self._ledger.list_all()
        elif start is None or end is None:
            raise ValidationError("Give both a start and an end date, or neither")
        else:
            sales = self._ledger.get_by_date_range(start, end).unwrap()

        names = {c.id: c.name for c in self._clients.list_all()}
        return [to_sale_dto(s, client_name=names.get(s.client_id)) for s in sales]
