"""Command line entry point for resolving legacy dataset contributors."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from legacy_agents.config import ConfigurationError, load_settings
from legacy_agents.db.legacy_store import DatabaseError, LegacyRecordStore
from legacy_agents.services.resolver import ContributorResolver, to_payload
from legacy_agents.utils.credential_manager import CredentialStorageError

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_FAILURE = 2


def setup_logging(verbose: bool = False):
    """Configure logging for the application."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler('legacy_agents.log', encoding='utf-8'),
            logging.StreamHandler()
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="legacy-agents",
        description="Resolve authors or contributors of a legacy SUMARIOPMD dataset as JSON."
    )
    parser.add_argument("dataset_id", type=int, help="Legacy resource id")
    parser.add_argument("--authors", action="store_true", help="Print the author view instead of all contributors")
    parser.add_argument("--env-file", default=None, help="Path to a .env file with DB_SUMARIOPMD_* settings")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(args.env_file)
        resolver = ContributorResolver(LegacyRecordStore.from_settings(settings))

        if args.authors:
            records = resolver.resolve_authors(args.dataset_id)
        else:
            records = resolver.resolve_contributors(args.dataset_id)
    except ValueError as e:
        logger.error(str(e))
        return EXIT_FAILURE
    except (ConfigurationError, CredentialStorageError) as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_FAILURE
    except DatabaseError as e:
        logger.error(f"Failed to load agents from legacy database: {e}")
        return EXIT_FAILURE

    if records is None:
        print(json.dumps({'error': 'Dataset not found'}))
        return EXIT_NOT_FOUND

    key = 'authors' if args.authors else 'contributors'
    print(json.dumps({key: to_payload(records)}, ensure_ascii=False, indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
