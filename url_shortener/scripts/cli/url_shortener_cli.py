#!/usr/bin/env python3
"""
Command-line interface for URL shortener service.

Operates directly on the configured data file, so it should not be run
against a file a live server is writing to.

Usage:
    python url_shortener_cli.py shorten <url> [--custom-code CODE] [--expiry-minutes N]
    python url_shortener_cli.py get <short_code>
    python url_shortener_cli.py list
    python url_shortener_cli.py stats
"""

import argparse
import asyncio
import json
import sys
from typing import Optional

from config import load_config
from lib.bootstrap import build_service
from lib.errors import URLShortenerError
from lib.common.logging_config import setup_logging


class URLShortenerCLI:
    """Command-line interface for URL shortener."""

    def __init__(self, data_file: Optional[str] = None, verbose: bool = False):
        """Initialize CLI."""
        self.config = load_config()
        if data_file:
            self.config.data_file = data_file
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.service = build_service(self.config, logger=self.logger)

    @staticmethod
    def _fail(message: str) -> int:
        print(json.dumps({
            "success": False,
            "error": message,
        }, indent=2), file=sys.stderr)
        return 1

    async def shorten(
        self,
        url: str,
        custom_code: Optional[str] = None,
        expiry_minutes: Optional[float] = None,
    ) -> int:
        """Shorten a URL."""
        try:
            record = await self.service.create_short_link(url, custom_code, expiry_minutes)
        except URLShortenerError as e:
            return self._fail(e.message)

        print(json.dumps({
            "success": True,
            "shortCode": record.short_code,
            "originalLink": record.original_link,
            "validUntil": record.expires_at,
        }, indent=2))
        return 0

    async def get(self, short_code: str) -> int:
        """Get original URL for a short code."""
        try:
            record = await self.service.resolve_short_link(short_code)
        except URLShortenerError as e:
            return self._fail(e.message)

        print(json.dumps({
            "success": True,
            "shortCode": short_code,
            "originalLink": record.original_link,
            "validUntil": record.expires_at,
        }, indent=2))
        return 0

    async def list_urls(self) -> int:
        """List all short links."""
        listing = await self.service.list_short_links()

        print(json.dumps({
            "success": True,
            "count": len(listing),
            "urls": [
                {
                    "shortCode": item.short_code,
                    "originalLink": item.original_link,
                    "createdTimestamp": item.created_at,
                    "validUntil": item.expires_at,
                    "expired": item.expired,
                }
                for item in listing
            ],
        }, indent=2))
        return 0

    async def stats(self) -> int:
        """Show table statistics."""
        print(json.dumps({
            "success": True,
            "statistics": await self.service.stats(),
        }, indent=2))
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="URL Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Shorten with custom code, valid for 10 minutes
  %(prog)s shorten https://example.com/long/url --custom-code mylink --expiry-minutes 10

  # Get original URL
  %(prog)s get mylink

  # List all URLs
  %(prog)s list
        """
    )

    parser.add_argument(
        "--data-file",
        default=None,
        help="JSON data file (default: from DATA_FILE env or urlRecords.json)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Shorten command
    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--custom-code", help="Custom short code")
    shorten_parser.add_argument("--expiry-minutes", type=float, help="Validity in minutes")

    # Get command
    get_parser = subparsers.add_parser("get", help="Get original URL")
    get_parser.add_argument("short_code", help="Short code to lookup")

    subparsers.add_parser("list", help="List all URLs")
    subparsers.add_parser("stats", help="Show table statistics")

    return parser


async def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    cli = URLShortenerCLI(data_file=args.data_file, verbose=args.verbose)

    if args.command == "shorten":
        return await cli.shorten(args.url, args.custom_code, args.expiry_minutes)
    elif args.command == "get":
        return await cli.get(args.short_code)
    elif args.command == "list":
        return await cli.list_urls()
    elif args.command == "stats":
        return await cli.stats()

    parser.print_help()
    return 1


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
