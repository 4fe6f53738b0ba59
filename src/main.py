import argparse
import logging
import sys

from config import get_config
from console import InputClosed
from database import DatabaseConnectionError
from logging_config import setup_logging
from managing_system import EXIT_CHOICE, ManagingSystem
from startup import Session

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="mechanic-shop",
        description="Front-desk console for the mechanic shop database.",
    )
    parser.add_argument("dbname", help="database name (<dbname>.db in MECHANIC_SHOP_DB_DIR)")
    parser.add_argument("port", type=int, help="database port")
    parser.add_argument("user", help="database user")
    parser.add_argument("--export-dir", help="also write every report run to CSV files in this directory")
    return parser


def run(system):
    """Menu loop: show the menu, dispatch the choice, stop on exit."""
    while True:
        system.display_menu()
        choice = system.read_choice()
        if choice == EXIT_CHOICE:
            break
        system.dispatch(choice)


def main(argv=None, console=None):
    """Main application entry point"""
    args = build_parser().parse_args(argv)   # Wrong arity exits with usage before any connection
    try:
        config = get_config()
    except ValueError as e:
        print(f"Error - Invalid configuration: {e}", file=sys.stderr)
        return 1
    setup_logging(config.log_level, config.log_file, config.db_dir)

    try:
        session = Session.open(args.dbname, args.port, args.user, config,
                               console=console, export_dir=args.export_dir)
    except DatabaseConnectionError as e:
        print(f"Error - Unable to Connect to Database: {e}", file=sys.stderr)
        return 1

    status = 0
    try:
        run(ManagingSystem(session))
    except InputClosed:
        logger.info("Operator input closed, ending session")
    except KeyboardInterrupt:
        status = 130
    finally:
        session.close()
    return status


# Ensure main() only runs if this script is executed directly
if __name__ == "__main__":
    sys.exit(main())
