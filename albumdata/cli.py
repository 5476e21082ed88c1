#!/usr/bin/env python3
"""Command-line interface entry points for the album-data package."""

import argparse
import logging
import sys

from .config_loader import load_config
from .engine import AlbumDataEngine
from .errors import AlbumDataError, InvalidInputError
from .resolver import normalize_album_names


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="album-data",
        description="Fetch an artist's albums with audio features and lyrics, one row per track",
    )
    parser.add_argument("artist", help="Artist name (capitalization does not matter)")
    parser.add_argument("albums", nargs="+", help="Album names (capitalization does not matter)")
    parser.add_argument("--config", help="Path to config file")
    parser.add_argument("--sequential", action="store_true", help="Fetch albums one at a time")
    parser.add_argument("--strategy", help="Concurrency strategy: default, threads, asyncio or sequential")
    parser.add_argument("--workers", type=int, help="Worker pool size (default: CPU count)")
    parser.add_argument("--output", "-o", help="Write to this file (.json for JSON, CSV otherwise)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    """Entry point for album-data command."""
    args = build_parser().parse_args(argv)
    config = load_config(args.config)

    if args.strategy:
        config.pipeline.concurrency_strategy = args.strategy
    if args.workers:
        config.pipeline.max_workers = args.workers
    if args.sequential:
        config.pipeline.parallel = False

    log_level = logging.DEBUG if (args.debug or config.debug) else getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger = logging.getLogger("albumdata.cli")

    try:
        normalize_album_names(args.albums)
        engine = AlbumDataEngine.from_config(config)
        album_data = engine.get_album_data(
            args.artist,
            args.albums,
            parallel=config.pipeline.parallel,
            concurrency_strategy=config.pipeline.concurrency_strategy,
        )
    except InvalidInputError as e:
        logger.error("%s", e)
        return 2
    except AlbumDataError as e:
        logger.error("Album data failed: %s", e)
        return 1

    if args.output and args.output.endswith(".json"):
        album_data.to_json(args.output, orient="records", indent=2)
    elif args.output:
        album_data.to_csv(args.output, index=False)
    else:
        album_data.to_csv(sys.stdout, index=False)

    misses = album_data.attrs.get("provider_misses", [])
    if misses:
        logger.warning("%d albums degraded: %s", len(misses), ", ".join(m["album_name"] for m in misses))
    return 0


def mcp_main():
    """Entry point for album-data-mcp command."""
    import asyncio

    from .mcp_server import serve_mcp

    return asyncio.run(serve_mcp())


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "mcp":
        mcp_main()
    else:
        sys.exit(main())
