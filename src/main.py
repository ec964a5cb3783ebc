"""
Economy Inventory - Main Entry Point

Wires the catalogue, appraiser and record store into an InventoryLedger and
provides a small command line for administering user inventories.
"""

import sys
from pathlib import Path

# Add the project root to the Python path for module discovery
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import argparse
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from src.catalogue import CatalogueResolver, JsonCatalogueSource, PointValueAppraiser
from src.inventory import InvalidItemNameError, InventoryLedger, InventoryStore


# Configure logging
def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class EconomyConfig:
    """Configuration for the inventory ledger."""

    data_dir: Path = field(default_factory=lambda: Path("data"))

    # Paths default to <data_dir>/economy/...
    catalogue_path: Optional[Path] = None
    point_values_path: Optional[Path] = None
    db_path: Optional[Path] = None
    in_memory: bool = False

    # Runtime options
    verbose: bool = False

    def __post_init__(self):
        """Ensure paths are Path objects and fill in defaults."""
        if isinstance(self.data_dir, str):
            self.data_dir = Path(self.data_dir)
        if isinstance(self.catalogue_path, str):
            self.catalogue_path = Path(self.catalogue_path)
        if isinstance(self.point_values_path, str):
            self.point_values_path = Path(self.point_values_path)
        if isinstance(self.db_path, str):
            self.db_path = Path(self.db_path)

        economy_dir = self.data_dir / "economy"
        if self.catalogue_path is None:
            self.catalogue_path = economy_dir / "catalogue.json"
        if self.point_values_path is None:
            self.point_values_path = economy_dir / "point_values.json"
        if self.db_path is None and not self.in_memory:
            self.db_path = economy_dir / "inventory.db"


def create_ledger(config: Optional[EconomyConfig] = None) -> InventoryLedger:
    """
    Build an InventoryLedger from configuration.

    Args:
        config: Economy configuration (default: EconomyConfig())

    Returns:
        Ledger backed by the configured catalogue, point values and database
    """
    config = config or EconomyConfig()

    resolver = CatalogueResolver(
        source=JsonCatalogueSource(config.catalogue_path),
        appraiser=PointValueAppraiser.from_json(config.point_values_path),
    )
    store = InventoryStore(None if config.in_memory else config.db_path)

    logger.info(f"Inventory ledger ready (catalogue: {config.catalogue_path})")
    return InventoryLedger(resolver, store)


# =============================================================================
# COMMAND LINE
# =============================================================================

def _item_id(value: str) -> int:
    """Parse an item id given in decimal or hex (0x1005)."""
    return int(value, 0)


def parse_arguments(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Economy Inventory - administer user item inventories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src.main add 1234 sword            # Give user 1234 a sword
  python -m src.main add-id 1234 0x1005        # Same, by item id
  python -m src.main list 1234 --type 0x1000   # User's items of one type
  python -m src.main value 1234                # Total inventory value
  python -m src.main users                     # Every user with items
        """
    )

    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path("data"),
        help="Directory for economy data (default: data)",
    )
    parser.add_argument(
        "--catalogue",
        type=Path,
        default=None,
        help="Catalogue JSON file (default: <data-dir>/economy/catalogue.json)",
    )
    parser.add_argument(
        "--point-values",
        type=Path,
        default=None,
        help="Point value table (default: <data-dir>/economy/point_values.json)",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="Inventory database (default: <data-dir>/economy/inventory.db)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Add an item by catalogue name")
    add_parser.add_argument("user_id", type=int)
    add_parser.add_argument("item_name")
    add_parser.add_argument("--expires", type=int, default=None, help="Expiration timestamp")

    add_id_parser = subparsers.add_parser("add-id", help="Add an item by item id")
    add_id_parser.add_argument("user_id", type=int)
    add_id_parser.add_argument("item_id", type=_item_id)
    add_id_parser.add_argument("--expires", type=int, default=None, help="Expiration timestamp")

    remove_parser = subparsers.add_parser("remove", help="Remove an inventory entry")
    remove_parser.add_argument("entry_id", type=int)

    list_parser = subparsers.add_parser("list", help="List a user's inventory")
    list_parser.add_argument("user_id", type=int)
    list_parser.add_argument("--type", dest="item_type", type=_item_id, default=None)

    value_parser = subparsers.add_parser("value", help="Show a user's inventory value")
    value_parser.add_argument("user_id", type=int)

    subparsers.add_parser("users", help="List users that have an inventory")

    return parser.parse_args(argv)


def create_config_from_args(args: argparse.Namespace) -> EconomyConfig:
    """Create EconomyConfig from parsed arguments."""
    return EconomyConfig(
        data_dir=args.data_dir,
        catalogue_path=args.catalogue,
        point_values_path=args.point_values,
        db_path=args.db,
        verbose=args.verbose,
    )


def run_command(ledger: InventoryLedger, args: argparse.Namespace) -> int:
    """Run one CLI command against the ledger, returning the exit code."""
    if args.command == "add":
        try:
            ledger.add_item_by_name(args.user_id, args.item_name, args.expires)
        except InvalidItemNameError as e:
            print(str(e), file=sys.stderr)
            return 1
        print(f"Added {args.item_name} to user {args.user_id}")

    elif args.command == "add-id":
        ledger.add_item(args.user_id, args.item_id, args.expires)
        print(f"Added item {args.item_id:#06x} to user {args.user_id}")

    elif args.command == "remove":
        ledger.remove_item(args.entry_id)
        print(f"Removed entry {args.entry_id}")

    elif args.command == "list":
        for record in ledger.get_inventory(args.user_id, args.item_type):
            name = ledger.get_display_name(record) or "(unknown item)"
            acquired = datetime.fromtimestamp(record.timestamp).isoformat(timespec="seconds")
            expired = " [expired]" if record.is_expired() else ""
            print(
                f"{record.entry_id:>6}  {record.item_id:#06x}  {name:<24} "
                f"{record.value:>8}  {acquired}{expired}"
            )

    elif args.command == "value":
        print(ledger.get_inventory_value(args.user_id))

    elif args.command == "users":
        for user_id in sorted(ledger.get_users_with_inventory()):
            print(user_id)

    return 0


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI usage."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    config = create_config_from_args(args)
    ledger = create_ledger(config)
    return run_command(ledger, args)


if __name__ == "__main__":
    sys.exit(main())
