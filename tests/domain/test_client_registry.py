"""Unit tests for the ClientRegistry and its order histories."""

import pytest

from grocer.domain.exceptions import EntityNotFoundError, ValidationError
from grocer.domain.model.client import Client
from grocer.domain.model.sale import Sale, SaleLine
from grocer.domain.store.client_registry import ClientRegistry
from tests.fakes import JAN_1, add_client


def _sale(sale_id: int, client_id: int | None) -> Sale:
    line = SaleLine(product_id=1, product_name="Apple", unit_price=1.0, quantity=1)
    return Sale.create(sale_id, JAN_1, [line], client_id=client_id)


class TestClient:

    def test_name_is_trimmed(self):
        assert Client.create(3, "  Ana ").name == "Ana"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_rejected(self, name):
        with pytest.raises(ValidationError, match="Client name cannot be empty"):
            Client.create(3, name)


class TestClientRegistryBasics:

    def test_add_and_find(self):
        registry = ClientRegistry()
        ana = add_client(registry, "Ana")
        assert ana.id == 1
        assert registry.find_by_id(1).value == ana

    def test_add_none_rejected(self):
        assert isinstance(ClientRegistry().add(None).error, ValidationError)

    def test_unknown_client_is_absent(self):
        outcome = ClientRegistry().find_by_id(3)
        assert outcome.ok and outcome.value is None

    def test_find_by_name_substring_any_case(self):
        registry = ClientRegistry()
        ana = add_client(registry, "Ana Torres")
        add_client(registry, "Bruno")
        mariana = add_client(registry, "Mariana")
        assert registry.find_by_name("ANA").value == [ana, mariana]

    def test_find_by_blank_name_rejected(self):
        assert not ClientRegistry().find_by_name("  ").ok
        assert not ClientRegistry().find_by_name(None).ok


class TestAppendSale:

    def test_appends_in_order(self):
        registry = ClientRegistry()
        ana = add_client(registry, "Ana")
        first, second = _sale(1, ana.id), _sale(2, ana.id)
        assert registry.append_sale(ana.id, first).ok
        assert registry.append_sale(ana.id, second).ok
        assert registry.history_of(ana.id).value == (first, second)

    def test_history_is_read_only_view(self):
        registry = ClientRegistry()
        ana = add_client(registry, "Ana")
        registry.append_sale(ana.id, _sale(1, ana.id))
        history = registry.history_of(ana.id).value
        assert isinstance(history, tuple)
        assert len(registry.history_of(ana.id).value) == 1

    def test_none_sale_rejected(self):
        registry = ClientRegistry()
        ana = add_client(registry, "Ana")
        assert isinstance(registry.append_sale(ana.id, None).error, ValidationError)

    def test_unknown_client_rejected(self):
        outcome = ClientRegistry().append_sale(5, _sale(1, 5))
        assert isinstance(outcome.error, EntityNotFoundError)

    def test_sale_for_another_client_rejected(self):
        registry = ClientRegistry()
        ana = add_client(registry, "Ana")
        bruno = add_client(registry, "Bruno")
        outcome = registry.append_sale(ana.id, _sale(1, bruno.id))
        assert isinstance(outcome.error, ValidationError)
        assert registry.history_of(ana.id).value == ()

    def test_same_sale_only_once(self):
        registry = ClientRegistry()
        ana = add_client(registry, "Ana")
        sale = _sale(1, ana.id)
        registry.append_sale(ana.id, sale)
        assert not registry.append_sale(ana.id, sale).ok
        assert registry.history_of(ana.id).value == (sale,)

    def test_history_of_unknown_client(self):
        assert isinstance(ClientRegistry().history_of(1).error, EntityNotFoundError)

    def test_owner_of(self):
        registry = ClientRegistry()
        ana = add_client(registry, "Ana")
        sale = _sale(1, ana.id)
        registry.append_sale(ana.id, sale)
        assert registry.owner_of(sale) == ana
        assert registry.owner_of(_sale(2, None)) is None


class TestClientReplaceAll:

    def test_replace_with_histories(self):
        registry = ClientRegistry()
        ana = Client(id=4, name="Ana")
        sale = _sale(1, 4)
        assert registry.replace_all([ana], {4: [sale]}).ok
        assert registry.history_of(4).value == (sale,)
        assert registry.next_id() == 5

    def test_history_for_unknown_client_rejected(self):
        registry = ClientRegistry()
        add_client(registry, "Bruno")
        outcome = registry.replace_all([Client(id=1, name="Ana")], {2: [_sale(1, 2)]})
        assert isinstance(outcome.error, EntityNotFoundError)
        # Unchanged on failure
        assert registry.find_by_id(1).value.name == "Bruno"

    @pytest.mark.parametrize("client_id", [None, 2])
    def test_history_with_foreign_sale_rejected(self, client_id):
        registry = ClientRegistry()
        add_client(registry, "Bruno")
        outcome = registry.replace_all(
            [Client(id=1, name="Ana"), Client(id=2, name="Bo")],
            {1: [_sale(1, client_id)]},
        )
        assert isinstance(outcome.error, ValidationError)
        assert "not made for that client" in outcome.reason
        assert registry.find_by_id(1).value.name == "Bruno"

    def test_repeated_sale_in_history_rejected(self):
        registry = ClientRegistry()
        sale = _sale(1, 1)
        outcome = registry.replace_all([Client(id=1, name="Ana")], {1: [sale, sale]})
        assert isinstance(outcome.error, ValidationError)
        assert "appears twice" in outcome.reason
        assert registry.list_all() == []

    def test_replace_none_rejected(self):
        assert not ClientRegistry().replace_all(None).ok
