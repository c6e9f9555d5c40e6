#!/usr/bin/env python3
"""
Command-line interface operating directly on the JSON record store.

Usage:
    che-shortener shorten <url>
    che-shortener get <short_code>
    che-shortener list

Stop the server first or point it at a different file: the server keeps
its own in-memory copy and rewrites the whole file on every change.
"""

import argparse
import asyncio
import json
import os
import sys
from typing import Optional, List

from .service import URLShortenerService
from .shortcode import ShortCodeGenerator
from .store.json_file import JSONFileURLStore
from .store.exceptions import StoreError
from .common.logging_config import setup_logging


class URLShortenerCLI:
    """Command-line interface for URL shortener."""
    
    def __init__(self, store_path: str, verbose: bool = False):
        """Initialize CLI."""
        self.store_path = store_path
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.store = None
        self.service = None
    
    def initialize(self):
        """Load the store and build the service."""
        self.store = JSONFileURLStore(self.store_path, logger=self.logger)
        self.store.load()
        self.service = URLShortenerService(
            store=self.store,
            short_code_generator=ShortCodeGenerator(),
            logger=self.logger,
        )
    
    async def shorten(self, url: str) -> int:
        """Shorten a URL."""
        try:
            record = await self.service.create_short_url(url)
        except (ValueError, StoreError) as e:
            _print_error(str(e))
            return 1
        
        _print_json({
            "success": True,
            **record.to_dict(),
        })
        return 0
    
    async def get(self, short_code: str) -> int:
        """Look up a short code without counting it as a redirect."""
        record = await self.service.get_url_info(short_code)
        
        if record is None:
            _print_error(f"Short code '{short_code}' not found")
            return 1
        
        _print_json({
            "success": True,
            **record.to_dict(),
        })
        return 0
    
    async def list_urls(self) -> int:
        """List every record."""
        records = await self.service.list_urls()
        
        _print_json({
            "success": True,
            "count": len(records),
            "urls": [record.to_dict() for record in records],
        })
        return 0


def _print_json(payload: dict) -> None:
    print(json.dumps(payload, indent=2))


def _print_error(message: str) -> None:
    print(json.dumps({"success": False, "error": message}, indent=2), file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="che-shortener",
        description="Che URL shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s shorten https://example.com/long/url
  %(prog)s get jolly-otter
  %(prog)s list
        """
    )
    
    parser.add_argument(
        "--store",
        default=os.getenv("STORE_PATH", "urls.json"),
        help="JSON record file (default: from STORE_PATH env or urls.json)"
    )
    
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )
    
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")
    
    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    
    get_parser = subparsers.add_parser("get", help="Get original URL")
    get_parser.add_argument("short_code", help="Short code to lookup")
    
    subparsers.add_parser("list", help="List all URLs")
    
    return parser


async def run(args: argparse.Namespace) -> int:
    cli = URLShortenerCLI(store_path=args.store, verbose=args.verbose)
    
    try:
        cli.initialize()
    except StoreError as e:
        _print_error(str(e))
        return 1
    
    if args.command == "shorten":
        return await cli.shorten(args.url)
    elif args.command == "get":
        return await cli.get(args.short_code)
    return await cli.list_urls()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if not args.command:
        parser.print_help()
        return 1
    
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
