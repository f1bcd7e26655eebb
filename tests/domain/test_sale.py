"""Unit tests for the Sale aggregate."""

import dataclasses

import pytest

from grocer.domain.exceptions import ValidationError
from grocer.domain.model.sale import Sale, SaleLine
from tests.fakes import JAN_1


def _line(product_id=1, name="Apple", price=1.0, qty=4.0) -> SaleLine:
    return SaleLine(product_id=product_id, product_name=name, unit_price=price, quantity=qty)


class TestSaleCreate:

    def test_total_is_sum_of_lines(self):
        sale = Sale.create(1, JAN_1, [_line(1, "Apple", 1.0, 4), _line(2, "Pear", 2.5, 2)])
        assert sale.total == pytest.approx(9.0)

    def test_anonymous_by_default(self):
        sale = Sale.create(1, JAN_1, [_line()])
        assert sale.client_id is None
        assert sale.is_anonymous

    def test_client_sale(self):
        sale = Sale.create(1, JAN_1, [_line()], client_id=3)
        assert sale.client_id == 3
        assert not sale.is_anonymous

    def test_empty_lines_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Sale.create(1, JAN_1, [])

    def test_missing_date_rejected(self):
        with pytest.raises(ValidationError, match="date is required"):
            Sale.create(1, None, [_line()])

    def test_duplicate_product_rejected(self):
        with pytest.raises(ValidationError, match="more than once"):
            Sale.create(1, JAN_1, [_line(1), _line(1)])

    def test_non_positive_quantity_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Sale.create(1, JAN_1, [_line(qty=0)])


class TestSaleImmutability:

    def test_fields_cannot_be_reassigned(self):
        sale = Sale.create(1, JAN_1, [_line()])
        with pytest.raises(dataclasses.FrozenInstanceError):
            sale.total = 0.0

    def test_quantities_view_is_read_only(self):
        sale = Sale.create(1, JAN_1, [_line(1, qty=4), _line(2, "Pear", 2.0, 1)])
        assert dict(sale.quantities) == {1: 4, 2: 1}
        with pytest.raises(TypeError):
            sale.quantities[1] = 100

    def test_lines_are_a_tuple(self):
        sale = Sale.create(1, JAN_1, [_line()])
        assert isinstance(sale.lines, tuple)
