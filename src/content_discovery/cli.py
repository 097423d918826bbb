"""Command-line entry point for querying a directory of markdown documents.

Examples:
    content-discovery --data-dir content search "transformer" --limit 2
    content-discovery tags
    content-discovery related attention-is-all-you-need --limit 3
    content-discovery list --category cs.CL --sort title
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Any

import orjson

from content_discovery.adapters.filesystem_store import FileSystemDocumentStore
from content_discovery.config import Settings
from content_discovery.domain.errors import (
    DocumentNotFoundError,
    InvalidArgumentError,
    StoreUnavailableError,
)
from content_discovery.domain.model import Document
from content_discovery.domain.search import QueryFilter, SortSpec
from content_discovery.observability.logging import configure_logging
from content_discovery.service_layer.discovery_service import DiscoveryService


logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_INVALID_ARGUMENT = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="content-discovery", description=__doc__.splitlines()[0])
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory of markdown documents")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")

    commands = parser.add_subparsers(dest="command", required=True)

    search = commands.add_parser("search", help="Fuzzy free-text search")
    search.add_argument("query")
    _add_paging(search)

    tag = commands.add_parser("tag", help="Documents carrying a tag")
    tag.add_argument("tag")
    _add_paging(tag)

    commands.add_parser("tags", help="List all tags")
    commands.add_parser("categories", help="List all categories")

    related = commands.add_parser("related", help="Documents related to a document id")
    related.add_argument("document_id")
    related.add_argument("--limit", type=int, default=None)

    listing = commands.add_parser("list", help="Filtered, sorted listing")
    listing.add_argument("--text", default=None)
    listing.add_argument("--tag", default=None)
    listing.add_argument("--category", default=None)
    listing.add_argument("--topic", default=None)
    listing.add_argument("--kind", choices=["post", "paper"], default=None)
    listing.add_argument("--featured", action=argparse.BooleanOptionalAction, default=None)
    listing.add_argument("--sort", default=None, help="published_at, updated_at, title or relevance")
    listing.add_argument("--direction", choices=["asc", "desc"], default=None)
    _add_paging(listing)

    return parser


def _add_paging(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--limit", type=int, default=None)


def _document_summary(document: Document) -> dict[str, Any]:
    return {
        "id": document.id,
        "title": document.title,
        "slug": document.slug,
        "tags": list(document.tags),
        "published_at": document.published_at.isoformat(),
    }


def _run(service: DiscoveryService, args: argparse.Namespace) -> Any:
    if args.command == "search":
        return service.search(args.query, args.page, args.limit).to_response()
    if args.command == "tag":
        return service.list_by_tag(args.tag, args.page, args.limit).to_response()
    if args.command == "tags":
        return {"tags": service.list_tags()}
    if args.command == "categories":
        return {"categories": service.list_categories()}
    if args.command == "related":
        related = service.related_to(args.document_id, args.limit)
        return {"related": [_document_summary(document) for document in related]}

    query_filter = QueryFilter(
        text=args.text,
        tag=args.tag,
        category=args.category,
        topic=args.topic,
        featured=args.featured,
        kind=args.kind,
    )
    sort = SortSpec(field=args.sort, direction=args.direction) if args.sort else None
    return service.list_page(query_filter, sort, args.page, args.limit).to_response()


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run one query and print the JSON result to stdout."""
    args = _build_parser().parse_args(argv)
    settings = Settings()
    configure_logging(args.log_level or settings.log_level, json_output=settings.log_json)

    store = FileSystemDocumentStore(args.data_dir or settings.data_dir)
    service = DiscoveryService(store, settings)

    try:
        payload = _run(service, args)
    except InvalidArgumentError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID_ARGUMENT
    except (DocumentNotFoundError, StoreUnavailableError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8") + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
