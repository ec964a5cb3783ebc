"""
Tests for configuration and the command line entry point.
"""

import json
from pathlib import Path

import pytest

from src.main import EconomyConfig, create_ledger, main


@pytest.fixture
def data_dir(tmp_path):
    """Data directory holding a catalogue and point value table."""
    economy_dir = tmp_path / "economy"
    economy_dir.mkdir()

    with open(economy_dir / "catalogue.json", "w") as f:
        json.dump({
            "sword_id": "0x1005",
            "0x1005": "Sword of Oak",
            "0x1000": "sword_points",
        }, f)

    with open(economy_dir / "point_values.json", "w") as f:
        json.dump({"exchange_rate": 10, "point_values": {"sword_points": 5}}, f)

    return tmp_path


class TestEconomyConfig:
    """Tests for EconomyConfig defaults."""

    def test_default_paths(self):
        config = EconomyConfig(data_dir="somewhere")

        assert config.data_dir == Path("somewhere")
        assert config.catalogue_path == Path("somewhere/economy/catalogue.json")
        assert config.point_values_path == Path("somewhere/economy/point_values.json")
        assert config.db_path == Path("somewhere/economy/inventory.db")

    def test_in_memory_has_no_db_path(self):
        config = EconomyConfig(in_memory=True)
        assert config.db_path is None

    def test_in_memory_ledger_creates_no_database(self, data_dir):
        ledger = create_ledger(EconomyConfig(data_dir=data_dir, in_memory=True))
        ledger.add_item(1, 0x1005)

        assert ledger.store.db_path == Path(":memory:")
        assert not (data_dir / "economy" / "inventory.db").exists()

    def test_explicit_paths_are_kept(self):
        config = EconomyConfig(catalogue_path="cat.json", db_path="inv.db")

        assert config.catalogue_path == Path("cat.json")
        assert config.db_path == Path("inv.db")


class TestCreateLedger:
    """Tests for wiring a ledger from configuration."""

    def test_create_ledger(self, data_dir):
        ledger = create_ledger(EconomyConfig(data_dir=data_dir, in_memory=True))

        ledger.add_item_by_name(1, "sword")

        assert ledger.get_inventory_value(1) == 50


class TestCommandLine:
    """Tests for the CLI commands."""

    def test_add_list_value_users(self, data_dir, capsys):
        argv = ["--data-dir", str(data_dir)]

        assert main(argv + ["add", "1", "sword"]) == 0
        assert main(argv + ["add-id", "2", "0x1005"]) == 0
        capsys.readouterr()

        assert main(argv + ["list", "1", "--type", "0x1000"]) == 0
        assert "Sword of Oak" in capsys.readouterr().out

        assert main(argv + ["value", "1"]) == 0
        assert capsys.readouterr().out.strip() == "50"

        assert main(argv + ["users"]) == 0
        assert capsys.readouterr().out.split() == ["1", "2"]

    def test_add_unknown_item(self, data_dir, capsys):
        assert main(["--data-dir", str(data_dir), "add", "1", "unknown_item"]) == 1
        assert "unknown_item" in capsys.readouterr().err

    def test_remove(self, data_dir, capsys):
        argv = ["--data-dir", str(data_dir)]
        main(argv + ["add", "1", "sword"])

        assert main(argv + ["remove", "1"]) == 0
        assert main(argv + ["remove", "1"]) == 0
        capsys.readouterr()

        main(argv + ["value", "1"])
        assert capsys.readouterr().out.strip() == "0"
