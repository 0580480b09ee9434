"""configure and rip commands."""

import asyncio
import sys

import httpx

from cgpripper.core.composer import load_template
from cgpripper.core.controller import RipConfig, RipController
from cgpripper.core.errors import InvalidArgumentError, RipperError
from cgpripper.core.http_client import create_client
from cgpripper.core.logger import initialize_logging
from cgpripper.utils.config import DEFAULT_CONFIG_PATH, load_session, save_session
from cgpripper.utils.validators import (
    validate_book_id,
    validate_concurrency,
    validate_page_count,
    validate_quality,
)


def cmd_configure(args):
    """Store the CGP session id in the config file."""
    save_session(args.session_id, args.file)
    print("Session configured")
    return 0


async def _rip(config: RipConfig):
    async with create_client() as client:
        controller = RipController(config, client)
        return await controller.run()


def cmd_rip(args):
    """Rip a CGP book to PDF."""
    try:
        # Everything is validated before the first request goes out
        pages = validate_page_count(args.pages)
        quality = validate_quality(args.quality)
        ok, error = validate_book_id(args.book_id)
        if not ok:
            raise InvalidArgumentError(error)
        max_concurrency = validate_concurrency(args.max_concurrency)
        session_id = load_session(args.file)
        template = load_template(args.template)

        initialize_logging(args.log_dir, verbose=args.verbose)

        config = RipConfig(
            book_id=args.book_id,
            session_id=session_id,
            pages=pages,
            quality=quality,
            output_dir=args.output,
            save_assets=not args.no_save_assets,
            uni_token=args.uni or None,
            template=template,
            max_concurrency=max_concurrency,
        )
        result = asyncio.run(_rip(config))
    except (RipperError, httpx.HTTPError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result.skipped_pages:
        print(f"Skipped pages: {', '.join(str(p) for p in result.skipped_pages)}")
    print(f"Book ripped successfully: {result.output_path}")
    return 0


def setup_commands(subparsers):
    """Setup configure and rip subcommands."""
    configure_parser = subparsers.add_parser("configure", help="Configure your CGP session")
    configure_parser.add_argument("session_id", metavar="session-id", help="ASP.NET_SessionId")
    configure_parser.add_argument("-f", "--file", default=DEFAULT_CONFIG_PATH, help="Path to config file")
    configure_parser.set_defaults(func=cmd_configure)

    rip_parser = subparsers.add_parser("rip", help="Rip a CGP book to PDF")
    rip_parser.add_argument("book_id", metavar="book-id", help="Book ID")
    rip_parser.add_argument("-p", "--pages", help="Number of pages to rip")
    rip_parser.add_argument("-q", "--quality", default="4", help="Background quality (1-4)")
    rip_parser.add_argument("-o", "--output", default=".", help="Output directory")
    rip_parser.add_argument("-f", "--file", default=DEFAULT_CONFIG_PATH, help="Config file path")
    rip_parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    rip_parser.add_argument("-u", "--uni", help="UNI token for SVG access")
    rip_parser.add_argument("-t", "--template", help="HTML page template file")
    rip_parser.add_argument("--no-save-assets", action="store_true",
                            help="Do not keep downloaded SVGs and backgrounds")
    rip_parser.add_argument("--max-concurrency", help="Limit pages fetched at once (default: no limit)")
    rip_parser.add_argument("--log-dir", help="Also write rotating log files to this directory")
    rip_parser.set_defaults(func=cmd_rip)
