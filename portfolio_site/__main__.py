"""
Command line entry point for the portfolio site builder.

Usage:
    python -m portfolio_site build --template site/index.html --output index.html
    python -m portfolio_site map-key --template site/index.html
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from portfolio_site.components.mapping.map_key import MapKeyResolver, mask_key
from portfolio_site.components.renderer.page import PageDocument
from portfolio_site.components.storage.file_storage import FileStorage
from portfolio_site.core.config import ConfigurationManager, load_configuration
from portfolio_site.core.exceptions import ConfigurationError, MapKeyUnavailableError, PortfolioSiteError
from portfolio_site.core.logger import get_logger, setup_logging
from portfolio_site.core.manager import SiteManager

logger = get_logger(__name__)

DEFAULT_TEMPLATE = "site/index.html"
DEFAULT_OUTPUT = "index.html"


def _read_template(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="portfolio_site", description="Build the portfolio page from its content document.")
    parser.add_argument("--env", help="Configuration environment (default: APP_ENV or 'development').")
    parser.add_argument("--config-dir", help="Directory with <env>.yaml configuration files.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Render the content document into the page template.")
    build.add_argument("--template", default=DEFAULT_TEMPLATE, help="Page template (HTML).")
    build.add_argument("--content", help="Content document URL or path (default from config).")
    build.add_argument("--skills", help="Language statistics URL or path (default from config).")
    build.add_argument("--output", default=DEFAULT_OUTPUT, help="Output file, relative to the storage base path.")
    build.add_argument("--output-dir", help="Storage base path (default from config).")

    map_key = subparsers.add_parser("map-key", help="Report where the map subscription key comes from.")
    map_key.add_argument("--template", help="Page template to inspect for a data-azure-maps-key attribute.")
    return parser


async def run_build(args: argparse.Namespace, config: ConfigurationManager) -> int:
    html = _read_template(args.template)
    manager = SiteManager(config=config)
    output_html, report = await manager.build_page(html, url=args.content, skills_url=args.skills)

    storage = FileStorage(config=config, base_path=args.output_dir)
    path = storage.save_text(output_html, args.output, overwrite=True)
    print(f"Built {path}")
    if report.skipped:
        for section, reason in report.skipped.items():
            print(f"  skipped {section}: {reason}")
    if not report.ok:
        print(f"Content load failed: {report.error}", file=sys.stderr)
        return 1
    return 0


def run_map_key(args: argparse.Namespace, config: ConfigurationManager) -> int:
    page = PageDocument(_read_template(args.template)) if args.template else None
    resolver = MapKeyResolver(config=config)
    try:
        resolution = resolver.require_key(page)
    except MapKeyUnavailableError as e:
        print(e.message, file=sys.stderr)
        return 1
    print(f"Map key from {resolution.source}: {mask_key(resolution.key)}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_configuration(env=args.env, config_dir=args.config_dir)
    except ConfigurationError as e:
        logging.basicConfig(level=logging.WARNING)
        logger.critical(f"Failed to load configuration: {e.message}")
        return 2

    setup_logging(config)
    logger.info(f"Configuration environment: {config.current_environment}")

    try:
        if args.command == "build":
            return asyncio.run(run_build(args, config))
        return run_map_key(args, config)
    except PortfolioSiteError as e:
        logger.error(str(e), exc_info=True)
        return 1
    except OSError as e:
        logger.error(f"Could not read template: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
