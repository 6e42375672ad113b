"""Tests for the click CLI."""

import json

from click.testing import CliRunner

from vending.infrastructure.cli.main import cli


def _run(*args, input=None):
    return CliRunner().invoke(cli, list(args), input=input)


class TestBuyCommand:

    def test_successful_purchase_with_change(self, monkeypatch):
        monkeypatch.delenv("VENDING_CONFIG", raising=False)
        result = _run("buy", "--product", "A2", "--coins", "200")
        assert result.exit_code == 0
        assert "Dispensed Cola. Change returned: $0.50" in result.output

    def test_insufficient_funds_refunds_and_fails(self, monkeypatch):
        monkeypatch.delenv("VENDING_CONFIG", raising=False)
        result = _run("buy", "--product", "A2", "--coins", "100,20")
        assert result.exit_code != 0
        assert "returned 2 coin(s): $1.00, $0.20" in result.output
        assert "$0.30 more required" in result.output

    def test_bad_coin_rejected(self, monkeypatch):
        monkeypatch.delenv("VENDING_CONFIG", raising=False)
        result = _run("buy", "--product", "A2", "--coins", "25")
        assert result.exit_code != 0
        assert "Invalid denomination" in result.output

    def test_config_file_option(self, tmp_path):
        path = tmp_path / "machine.json"
        path.write_text(
            json.dumps(
                {
                    "productList": [{"id": "C1", "name": "Crisps", "priceMinorUnits": 90, "stock": 1}],
                    "coinInventory": {},
                }
            ),
            encoding="utf-8",
        )
        result = _run("--config", str(path), "buy", "--product", "C1", "--coins", "100")
        assert result.exit_code != 0
        assert "exact change" in result.output


class TestStatusAndConfigCommands:

    def test_status_lists_default_catalog(self, monkeypatch):
        monkeypatch.delenv("VENDING_CONFIG", raising=False)
        result = _run("status")
        assert result.exit_code == 0
        assert "Sparkling Water" in result.output
        assert "Items remaining: 19" in result.output
        assert "Coins in machine: 95" in result.output

    def test_config_prints_json(self, monkeypatch):
        monkeypatch.delenv("VENDING_CONFIG", raising=False)
        result = _run("config")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["coinInventory"]["200"] == 5
        assert data["productList"][1]["name"] == "Cola"


class TestSessionCommand:

    def test_full_transaction(self, monkeypatch):
        monkeypatch.delenv("VENDING_CONFIG", raising=False)
        script = "insert 100\ninsert 100\nselect A2\npurchase\nquit\n"
        result = _run("session", input=script)
        assert result.exit_code == 0
        assert "Cola selected ($1.50)" in result.output
        assert "Change returned: $0.50" in result.output

    def test_errors_do_not_end_session(self, monkeypatch):
        monkeypatch.delenv("VENDING_CONFIG", raising=False)
        script = "insert 25\nselect\ncancel\n"
        result = _run("session", input=script)
        assert result.exit_code == 0
        assert "Error: Invalid denomination" in result.output
        assert "Unrecognized command" in result.output
        assert "Nothing to cancel." in result.output
        assert "Goodbye." in result.output

    def test_scenario_then_purchase(self, monkeypatch):
        monkeypatch.delenv("VENDING_CONFIG", raising=False)
        script = "scenario small-coin-shortage\nselect A1\ninsert 100\ninsert 50\npurchase\n"
        result = _run("session", input=script)
        assert "Scenario: Limited small coins for change" in result.output
        assert "Cannot dispense exact change" in result.output
