"""Tests for the sale lookup use cases (show, list, client history)."""

import pytest

from grocer.application.client_history import ClientHistoryHandler
from grocer.application.list_sales import ListSalesHandler
from grocer.application.register_sale import RegisterSaleHandler
from grocer.application.show_sale import ShowSaleHandler
from grocer.domain.exceptions import EntityNotFoundError, ValidationError
from grocer.domain.model.sale import SaleItemSpec
from tests.fakes import FEB_1, JAN_1, JAN_15, JAN_31, add_client, add_product, make_stores


def _setup():
    inventory, clients, ledger = make_stores()
    apple = add_product(inventory, "Apple", 1.0, 100)
    ana = add_client(clients, "Ana")
    register = RegisterSaleHandler(ledger, clients)
    register.handle([SaleItemSpec(apple.id, 1)], sale_date=JAN_1, client_id=ana.id)
    register.handle([SaleItemSpec(apple.id, 2)], sale_date=JAN_15)
    register.handle([SaleItemSpec(apple.id, 3)], sale_date=FEB_1, client_id=ana.id)
    return ledger, clients, ana


class TestShowSale:

    def test_shows_owner(self):
        ledger, clients, _ = _setup()
        dto = ShowSaleHandler(ledger, clients).handle(1)
        assert dto.client_name == "Ana"
        assert dto.total == pytest.approx(1.0)

    def test_anonymous_sale_has_no_owner(self):
        ledger, clients, _ = _setup()
        assert ShowSaleHandler(ledger, clients).handle(2).client_name is None

    def test_unknown_sale(self):
        ledger, clients, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Sale #99 not found"):
            ShowSaleHandler(ledger, clients).handle(99)


class TestListSales:

    def test_all_sales(self):
        ledger, clients, _ = _setup()
        assert [s.id for s in ListSalesHandler(ledger, clients).handle()] == [1, 2, 3]

    def test_date_range(self):
        ledger, clients, _ = _setup()
        sales = ListSalesHandler(ledger, clients).handle(JAN_1, JAN_31)
        assert [s.date for s in sales] == ["2024-01-01", "2024-01-15"]

    def test_half_open_range_rejected(self):
        ledger, clients, _ = _setup()
        with pytest.raises(ValidationError, match="both a start and an end"):
            ListSalesHandler(ledger, clients).handle(start=JAN_1)

    def test_inverted_range_rejected(self):
        ledger, clients, _ = _setup()
        with pytest.raises(ValidationError, match="after end date"):
            ListSalesHandler(ledger, clients).handle(FEB_1, JAN_1)


class TestClientHistory:

    def test_history_in_order(self):
        _, clients, ana = _setup()
        history = ClientHistoryHandler(clients).handle(ana.id)
        assert [s.id for s in history] == [1, 3]

    def test_unknown_client(self):
        _, clients, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Client #5 not found"):
            ClientHistoryHandler(clients).handle(5)
