#!/usr/bin/env python3
"""
Command-line interface for administering links directly against the store.

Usage:
    shortlinks create <url> [--code CODE]
    shortlinks bulk <url> [--count N] [--prefix P]
    shortlinks list [--page N] [--limit N]
    shortlinks get <slug>
    shortlinks resolve <slug>
    shortlinks delete <slug>
    shortlinks delete-by-url <url>
    shortlinks health

Store selection follows the service configuration (STORE_BACKEND, MONGO_URI,
POSTGRES_URL, JSON_STORE_PATH) unless overridden by flags.
"""

import argparse
import asyncio
import json
import sys
from typing import Optional, List

from config import Config
from .errors import LinkError
from .service import LinkService
from .store.factory import create_store
from .common.logging_config import setup_logging


class LinkCLI:
    """Command-line interface for the link store."""

    def __init__(self, config: Config, verbose: bool = False):
        """Initialize CLI."""
        self.config = config
        # stdout is reserved for JSON results
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING", stream=sys.stderr)
        self.store = None
        self.service = None

    async def initialize(self):
        """Connect the store and build the service."""
        self.store = create_store(self.config, logger=self.logger)
        await self.store.connect()
        self.service = LinkService.from_config(self.store, self.config, logger=self.logger)

    async def cleanup(self):
        """Cleanup resources."""
        if self.store:
            await self.store.close()

    @staticmethod
    def _print(payload: dict, error: bool = False) -> int:
        print(json.dumps(payload, indent=2, default=str), file=sys.stderr if error else sys.stdout)
        return 1 if error else 0

    async def run_command(self, args: argparse.Namespace) -> int:
        """Execute one parsed command and print its JSON result."""
        try:
            if args.command == "create":
                result = await self.service.create_link(args.url, slug=args.code)
            elif args.command == "bulk":
                result = await self.service.bulk_create(args.url, count=args.count, prefix=args.prefix)
            elif args.command == "list":
                result = await self.service.list_links(page=args.page, limit=args.limit)
            elif args.command == "get":
                link = await self.store.get_link(args.slug)
                if link is None:
                    return self._print({"success": False, "error": f"Slug '{args.slug}' not found"}, error=True)
                result = link.to_dict()
                result["short"] = self.service.short_url(link.slug)
            elif args.command == "resolve":
                result = {"slug": args.slug, "url": await self.service.resolve(args.slug)}
            elif args.command == "delete":
                result = await self.service.delete_link(args.slug)
            elif args.command == "delete-by-url":
                result = await self.service.delete_links_by_url(args.url)
            elif args.command == "health":
                result = await self.service.health_check()
                if result["db"] != "connected":
                    return self._print({"success": False, **result}, error=True)
            else:
                return self._print({"success": False, "error": f"Unknown command {args.command}"}, error=True)
        except LinkError as e:
            return self._print({"success": False, "error": e.message}, error=True)

        return self._print({"success": True, **result})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shortlinks",
        description="shortlinks admin CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create a link with a generated slug
  %(prog)s create https://example.com/long/url

  # Create with a chosen slug
  %(prog)s create https://example.com/long/url --code promo

  # Generate 100 links starting with "qr"
  %(prog)s bulk https://example.com/landing --count 100 --prefix qr

  # Second page of 20
  %(prog)s list --page 2 --limit 20
        """
    )

    parser.add_argument("--backend", help="Store backend (auto, mongo, postgres, json)")
    parser.add_argument("--mongo-uri", help="MongoDB connection string")
    parser.add_argument("--postgres-url", help="PostgreSQL connection URL")
    parser.add_argument("--json-path", help="JSON link file path")
    parser.add_argument("--base-url", help="Base URL used to build short links")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    create_parser = subparsers.add_parser("create", help="Create a link")
    create_parser.add_argument("url", help="Destination URL")
    create_parser.add_argument("--code", help="Custom slug")

    bulk_parser = subparsers.add_parser("bulk", help="Generate many links for one URL")
    bulk_parser.add_argument("url", help="Destination URL")
    bulk_parser.add_argument("--count", type=int, default=10, help="Number of links")
    bulk_parser.add_argument("--prefix", default=None, help="Slug prefix")

    list_parser = subparsers.add_parser("list", help="List links, newest first")
    list_parser.add_argument("--page", type=int, default=1, help="Page number")
    list_parser.add_argument("--limit", type=int, default=100, help="Page size")

    get_parser = subparsers.add_parser("get", help="Show a link without counting a visit")
    get_parser.add_argument("slug", help="Slug to look up")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a slug and count a visit")
    resolve_parser.add_argument("slug", help="Slug to resolve")

    delete_parser = subparsers.add_parser("delete", help="Delete a link")
    delete_parser.add_argument("slug", help="Slug to delete")

    delete_url_parser = subparsers.add_parser("delete-by-url", help="Delete all links for a URL")
    delete_url_parser.add_argument("url", help="Destination URL to match exactly")

    subparsers.add_parser("health", help="Check store health")

    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    """Load configuration, letting command-line flags win over the environment."""
    overrides = {
        "store_backend": args.backend,
        "mongo_uri": args.mongo_uri,
        "postgres_url": args.postgres_url,
        "json_store_path": args.json_path,
        "base_url": args.base_url,
    }
    return Config(**{key: value for key, value in overrides.items() if value is not None})


async def main(argv: Optional[List[str]] = None) -> int:
    """Parse ``argv`` and run the command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    cli = LinkCLI(config_from_args(args), verbose=args.verbose)

    try:
        await cli.initialize()
        return await cli.run_command(args)
    except LinkError as e:
        print(json.dumps({"success": False, "error": e.message}, indent=2), file=sys.stderr)
        return 1
    except ValueError as e:
        # Unknown backend or missing connection setting
        print(json.dumps({"success": False, "error": str(e)}, indent=2), file=sys.stderr)
        return 1
    finally:
        await cli.cleanup()


def run():
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
