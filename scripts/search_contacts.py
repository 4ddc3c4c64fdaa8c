#!/usr/bin/env python3
"""
Search the contacts directory from the terminal:
- search by name (paginated) or by phone number
- print matches with formatted phone numbers

Uses API_BASE_URL / API_KEY / API_USERNAME / API_PASSWORD from the environment
(or .env) and config/directory_config.yml. Pass --mock to run against the
in-memory backend instead.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from railway_directory.app import build_directory_app
from railway_directory.utils.config_loader import load_directory_config


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def print_results(search) -> None:
    if search.error:
        print(f"Error: {search.error}")
        return
    if not search.contacts:
        print("No contacts found.")
        return

    for contact in search.contacts:
        print(f"- {contact.name}")
        print(f"    phone={contact.display('phone')} lobby={contact.display('lobby')} "
              f"blood_group={contact.display('blood_group')} designation={contact.display('designation')}")

    pagination = search.pagination
    if pagination and pagination.controls_enabled:
        print(f"\nPage {pagination.page} of {pagination.total_pages} ({pagination.total} contacts)")


async def run(args: argparse.Namespace) -> int:
    config = load_directory_config(Path(args.config) if args.config else None)
    if args.mock:
        config.use_mock_backend = True

    app = build_directory_app(config)
    try:
        search = app.contacts_search()
        if args.mode == "phone":
            await search.search_by_phone(args.query)
        else:
            await search.search_by_name(args.query, page=args.page)
        print_results(search)
        return 1 if search.error else 0
    finally:
        await app.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Search the railway contacts directory")
    parser.add_argument("mode", choices=["name", "phone"], help="Search by name or by phone number")
    parser.add_argument("query", help="Name fragment or phone number")
    parser.add_argument("--page", type=int, default=1, help="Result page for name searches (default: 1)")
    parser.add_argument("--config", help="Path to a directory_config.yml")
    parser.add_argument("--mock", action="store_true", help="Use the in-memory mock backend")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
