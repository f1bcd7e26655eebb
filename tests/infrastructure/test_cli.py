"""End-to-end tests for the click command line, against a temporary data dir."""

import json
import logging

import pytest
from click.testing import CliRunner

from grocer.infrastructure.cli.main import cli
from grocer.infrastructure.logging_config import LOG_FILE_NAME, LOGGER_NAME


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(cli, ["--data-dir", str(tmp_path), *args])

    return _run


def _stock_up(run):
    assert run("product", "add", "--name", "Apple", "--price", "1.5",
               "--stock", "10", "--category", "fruit").exit_code == 0
    assert run("product", "add", "--name", "Leek", "--price", "2",
               "--stock", "3", "--category", "Vegetable").exit_code == 0
    assert run("client", "add", "--name", "Ana").exit_code == 0


class TestProductCommands:

    def test_add_then_list(self, run, tmp_path):
        result = run("product", "add", "--name", "Apple", "--price", "1.5",
                     "--stock", "10", "--category", "Fruit")

        assert result.exit_code == 0
        assert "Product #1 'Apple' added at 1.50" in result.output
        assert (tmp_path / "products.json").exists()

        listing = run("product", "list")
        assert "Apple" in listing.output
        assert "Fruit" in listing.output

    def test_list_by_category(self, run):
        _stock_up(run)
        result = run("product", "list", "--category", "vegetable")
        assert "Leek" in result.output
        assert "Apple" not in result.output

    def test_negative_price_rejected(self, run):
        result = run("product", "add", "--name", "Apple", "--price", "-1",
                     "--stock", "10", "--category", "Fruit")
        assert result.exit_code == 1
        assert "Price cannot be negative" in result.output

    def test_unknown_category_rejected(self, run):
        result = run("product", "add", "--name", "Bread", "--price", "1",
                     "--stock", "1", "--category", "Bakery")
        assert result.exit_code == 2

    def test_set_stock(self, run):
        _stock_up(run)
        result = run("product", "stock", "--id", "2", "--set", "7.5")
        assert result.exit_code == 0
        assert "Stock:    7.5" in run("product", "show", "--id", "2").output

    def test_show_unknown_product(self, run):
        result = run("product", "show", "--id", "9")
        assert result.exit_code == 1
        assert "No product found with ID: 9" in result.output


class TestSaleCommands:

    def test_client_sale_round_trip(self, run):
        _stock_up(run)

        result = run("sale", "create", "--items", "1:4,2:0.5",
                     "--client", "1", "--date", "2024-01-15")

        assert result.exit_code == 0, result.output
        assert "Sale #1  (2024-01-15)" in result.output
        assert "Client: #1 Ana" in result.output
        assert "7.00" in result.output

        assert "Stock:    6" in run("product", "show", "--id", "1").output
        assert "Sale #1" in run("sale", "show", "--id", "1").output
        history = run("client", "history", "--id", "1").output
        assert "2024-01-15" in history

    def test_oversell_leaves_stock_alone(self, run):
        _stock_up(run)

        result = run("sale", "create", "--items", "1:2,2:5")

        assert result.exit_code == 1
        assert "Insufficient stock for Leek" in result.output
        assert "Stock:    10" in run("product", "show", "--id", "1").output
        assert "No sales found." in run("sale", "list").output

    def test_unknown_client_refused(self, run):
        _stock_up(run)
        result = run("sale", "create", "--items", "1:1", "--client", "42")
        assert result.exit_code == 1
        assert "Client #42 not found" in result.output

    @pytest.mark.parametrize("items", ["1", "x:2", "1:many"])
    def test_malformed_items(self, run, items):
        result = run("sale", "create", "--items", items)
        assert result.exit_code == 2

    def test_list_by_date_range(self, run):
        _stock_up(run)
        run("sale", "create", "--items", "1:1", "--date", "2024-01-01")
        run("sale", "create", "--items", "1:1", "--date", "2024-02-01")

        result = run("sale", "list", "--from", "2024-01-01", "--to", "2024-01-31")

        assert "2024-01-01" in result.output
        assert "2024-02-01" not in result.output

    def test_list_needs_both_bounds(self, run):
        result = run("sale", "list", "--from", "2024-01-01")
        assert result.exit_code == 1
        assert "both a start and an end" in result.output


class TestReportCommands:

    def test_sales_report(self, run):
        _stock_up(run)
        run("sale", "create", "--items", "1:2", "--client", "1", "--date", "2024-01-10")

        result = run("report", "sales", "--from", "2024-01-01", "--to", "2024-01-31")

        assert result.exit_code == 0
        assert "Number of sales: 1" in result.output
        assert "3.00" in result.output

    def test_inventory_report(self, run):
        _stock_up(run)
        result = run("report", "inventory")
        assert "Total stock value" in result.output
        assert "21.00" in result.output

    def test_reports_with_no_data(self, run):
        assert "No sales data available." in run("report", "stats").output
        assert "No clients found" in run("report", "clients").output


class TestStartupAndConfig:

    def test_data_dir_from_environment(self, tmp_path):
        runner = CliRunner()
        env = {"GROCER_DATA_DIR": str(tmp_path)}

        runner.invoke(cli, ["client", "add", "--name", "Bea"], env=env)

        saved = json.loads((tmp_path / "clients.json").read_text(encoding="utf-8"))
        assert saved[0]["name"] == "Bea"

    def test_unreadable_data_blocks_saving(self, run, tmp_path):
        (tmp_path / "products.json").write_text("{broken", encoding="utf-8")

        result = run("client", "add", "--name", "Ana")

        assert "could not load data" in result.output
        assert result.exit_code == 1
        assert "Change not saved" in result.output
        assert (tmp_path / "products.json").read_text(encoding="utf-8") == "{broken"

    def test_json_log_file(self, tmp_path):
        logs = tmp_path / "logs"
        CliRunner().invoke(cli, [
            "--data-dir", str(tmp_path / "data"), "--log-dir", str(logs), "-v",
            "client", "add", "--name", "Ana",
        ])

        lines = (logs / LOG_FILE_NAME).read_text(encoding="utf-8").splitlines()
        records = [json.loads(line) for line in lines]
        assert records
        assert {"timestamp", "level", "logger", "message"} <= set(records[0])
        assert any(r["message"].startswith("Saved") for r in records)
