"""python -m index_engine book.odt  ->  book.odt.indexed.odt"""
import argparse
import logging
import sys

from .config import load_settings
from .errors import IndexerError
from .log_config import setup_logging
from .pipeline import index_odt_file

logger = logging.getLogger("index_engine")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="index_engine",
        description="Turn alphabetical index marks in an .odt into bookmarks and build a linked index at [INDEX_HERE].",
    )
    p.add_argument("source", help="path to the .odt file to copy and index")
    p.add_argument("-o", "--output", help="output path (default: <source>.indexed.odt)")
    p.add_argument("-c", "--config", help="settings file (default: ./EbookIndexer.properties)")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    try:
        settings = load_settings(args.config)
        out = index_odt_file(args.source, settings, args.output)
    except IndexerError as e:
        logger.error("indexing failed: %s", e)
        return 1
    print(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
