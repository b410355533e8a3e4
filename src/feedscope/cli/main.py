"""Main CLI entry point for the feedscope command-line tool.

Provides document type detection, element dumps of RSS, Atom and OPML
documents, and feed-link discovery in HTML pages. The CLI is the only part
of the package that reads files.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from feedscope import __version__
from feedscope.api import UnsupportedFeedError, iter_atom, iter_feed, iter_opml, iter_rss, to_records
from feedscope.character import FeedEncodingError
from feedscope.formats import BaseUrl, detect_type, iter_feed_links
from feedscope.scope import ContainerElement, DocumentIterator, Element, LeafElement
from feedscope.shared import FeedParserConfig, get_logger

FEED_ITERATORS = {
    "auto": iter_feed,
    "rss": iter_rss,
    "atom": iter_atom,
    "opml": iter_opml,
}
TEXT_PREVIEW_LENGTH = 60


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.parser_config = FeedParserConfig.default()
        self.output_format = "json"

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        The ``parser`` object holds ``FeedParserConfig`` fields;
        ``output_format`` selects the default dump format.
        """
        config = cls()
        try:
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
            config.parser_config = FeedParserConfig.from_dict(data.get("parser", {}))
            config.output_format = data.get("output_format", config.output_format)
        except (OSError, ValueError) as e:
            print(f"Warning: Could not load config file: {e}", file=sys.stderr)
        return config


def read_input(path: Path) -> bytes:
    """Read a document; ``-`` reads standard input."""
    if str(path) == "-":
        return sys.stdin.buffer.read()
    return path.read_bytes()


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="feedscope",
        description="Pull-parse RSS, Atom and OPML documents"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output (debug logging)"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output (errors only)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    detect_parser = subparsers.add_parser("detect", help="Detect document types")
    detect_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Documents to inspect ('-' for stdin)"
    )

    dump_parser = subparsers.add_parser("dump", help="Dump the elements of a feed")
    dump_parser.add_argument(
        "path",
        type=Path,
        help="Feed document ('-' for stdin)"
    )
    dump_parser.add_argument(
        "--type", "-t",
        choices=sorted(FEED_ITERATORS),
        default="auto",
        help="Feed format (default: auto-detect)"
    )
    dump_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        help="Output format (default: json)"
    )
    dump_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    links_parser = subparsers.add_parser("links", help="List feed links of an HTML page")
    links_parser.add_argument(
        "path",
        type=Path,
        help="HTML document ('-' for stdin)"
    )

    return parser


def format_text(elements: Iterable[Element], depth: int = 0) -> List[str]:
    """Render elements as an indented outline, draining containers as they come."""
    lines = []
    indent = "  " * depth
    for element in elements:
        attributes = " ".join(
            f'{attribute.name}="{attribute.value}"' if attribute.value is not None
            else str(attribute.name)
            for attribute in element.attributes
        )
        label = f"{indent}{element.name}" + (f" [{attributes}]" if attributes else "")
        if isinstance(element, ContainerElement):
            lines.append(label)
            lines.extend(format_text(element, depth + 1))
        elif isinstance(element, LeafElement):
            content = element.content
            if content is None:
                lines.append(label)
            else:
                preview = " ".join(content.split())
                if len(preview) > TEXT_PREVIEW_LENGTH:
                    preview = preview[:TEXT_PREVIEW_LENGTH - 3] + "..."
                lines.append(f"{label}: {preview}")
    return lines


def cmd_detect(args: argparse.Namespace) -> int:
    """Handle detect command."""
    exit_code = 0
    for path in args.paths:
        try:
            feed_type = detect_type(read_input(path))
        except (OSError, FeedEncodingError) as e:
            print(f"{path}: error: {e}", file=sys.stderr)
            exit_code = 1
            continue
        print(f"{path}: {feed_type.value}")
    return exit_code


def cmd_dump(args: argparse.Namespace) -> int:
    """Handle dump command."""
    config = CLIConfig.from_file(args.config) if args.config else CLIConfig()
    output_format = args.format or config.output_format
    logger = get_logger(__name__, config.parser_config.correlation_id, "cli")

    try:
        data = read_input(args.path)
        iterator: DocumentIterator = FEED_ITERATORS[args.type](data, config.parser_config)
    except OSError as e:
        print(f"Error reading {args.path}: {e}", file=sys.stderr)
        return 1
    except (UnsupportedFeedError, FeedEncodingError) as e:
        print(f"{args.path}: {e}", file=sys.stderr)
        return 1

    if output_format == "text":
        print("\n".join(format_text(iterator)))
    else:
        document: Dict[str, Any] = {
            "root": iterator.root.name.qualified if iterator.root else None,
            "elements": to_records(iterator),
            "diagnostics": [entry.to_dict() for entry in iterator.diagnostics],
        }
        print(json.dumps(document, indent=2))

    if iterator.diagnostics.has_warnings:
        logger.info(
            "Document required recovery",
            extra={"diagnostic_count": len(iterator.diagnostics)},
        )
    return 0


def cmd_links(args: argparse.Namespace) -> int:
    """Handle links command."""
    try:
        data = read_input(args.path)
        links = list(iter_feed_links(data))
    except (OSError, FeedEncodingError) as e:
        print(f"Error reading {args.path}: {e}", file=sys.stderr)
        return 1

    for link in links:
        if isinstance(link, BaseUrl):
            print(f"base\t{link.href}")
        else:
            print(f"feed\t{link.href}\t{link.type or ''}\t{link.title or ''}".rstrip())
    return 0 if links else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    try:
        if args.command == "detect":
            return cmd_detect(args)
        elif args.command == "dump":
            return cmd_dump(args)
        elif args.command == "links":
            return cmd_links(args)
        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
