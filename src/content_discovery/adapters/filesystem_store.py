"""Filesystem-backed document store.

Reads a directory tree of markdown files, each carrying its metadata as YAML
front matter (see ``content_discovery.utils.front_matter``). The tree is read
fresh on every call; nothing is cached between calls.

Recognised front matter keys: ``id``, ``title``, ``slug``, ``excerpt``,
``tags``, ``categories``, ``authors``, ``published_at``, ``updated_at``,
``featured`` and ``kind``. The markdown after the front matter is the body.
A missing ``id`` falls back to the file's path relative to the root, without
its suffix.
"""

from datetime import date, datetime, time, timezone
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError
import yaml

from content_discovery.adapters.document_store import AbstractDocumentStore, select_documents
from content_discovery.domain.errors import DocumentNotFoundError, StoreUnavailableError
from content_discovery.domain.model import Document
from content_discovery.domain.search import StoreFilter
from content_discovery.utils.front_matter import parse_front_matter


logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")
_SEQUENCE_KEYS = ("tags", "categories", "authors")
_SCALAR_KEYS = ("title", "slug", "excerpt", "featured", "kind")


def _coerce_timestamp(value: Any) -> Any:
    # YAML turns bare dates into ``date``; documents need timezone-aware datetimes
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time(), tzinfo=timezone.utc)
    return value


def _coerce_sequence(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    return tuple(str(item) for item in value)


class FileSystemDocumentStore(AbstractDocumentStore):
    """Store reading ``*.md`` files with YAML front matter below ``base_dir``.

    Corpus order is the sorted relative path of each file. Files that fail to
    parse or validate are skipped with a warning so one bad post cannot take
    the whole listing down.
    """

    def __init__(self, base_dir: Path, *, encoding: str = "utf-8"):
        self.base_dir = base_dir.expanduser().resolve(strict=False)
        self.encoding = encoding

    def list_all(self, store_filter: StoreFilter | None = None, limit: int | None = None) -> list[Document]:
        return select_documents(self._load_all(), store_filter, limit)

    def get_by_id(self, document_id: str) -> Document:
        for document in self._load_all():
            if document.id == document_id:
                return document
        raise DocumentNotFoundError(document_id)

    def _markdown_paths(self) -> list[Path]:
        if not self.base_dir.is_dir():
            raise StoreUnavailableError(f"Document directory does not exist: {self.base_dir}")
        try:
            paths = [
                path
                for path in self.base_dir.rglob("*")
                if path.suffix.lower() in MARKDOWN_SUFFIXES and path.is_file()
            ]
        except OSError as e:
            raise StoreUnavailableError(f"Failed to list documents in {self.base_dir}: {e}") from e
        return sorted(paths, key=lambda path: path.relative_to(self.base_dir).as_posix())

    def _load_all(self) -> list[Document]:
        documents: list[Document] = []
        seen: set[str] = set()
        for path in self._markdown_paths():
            document = self._load(path)
            if document is None:
                continue
            if document.id in seen:
                logger.warning(f"Skipping {path}: duplicate document id {document.id!r}")
                continue
            seen.add(document.id)
            documents.append(document)
        return documents

    def _load(self, path: Path) -> Document | None:
        try:
            content = path.read_text(encoding=self.encoding)
        except UnicodeDecodeError as e:
            logger.warning(f"Skipping {path}: not valid {self.encoding}: {e}")
            return None
        except OSError as e:
            raise StoreUnavailableError(f"Failed to read {path}: {e}") from e

        try:
            metadata, markdown = parse_front_matter(content)
        except yaml.YAMLError as e:
            logger.warning(f"Skipping {path}: invalid front matter: {e}")
            return None

        try:
            return self._hydrate(path, metadata, markdown)
        except (ValidationError, ValueError, TypeError) as e:
            logger.warning(f"Skipping {path}: {e}")
            return None

    def _hydrate(self, path: Path, metadata: dict[str, Any], markdown: str) -> Document:
        relative_id = path.relative_to(self.base_dir).with_suffix("").as_posix()
        fields: dict[str, Any] = {
            "id": str(metadata.get("id") or relative_id),
            "body": markdown.strip(),
            "published_at": _coerce_timestamp(metadata.get("published_at")),
        }
        if metadata.get("updated_at") is not None:
            fields["updated_at"] = _coerce_timestamp(metadata["updated_at"])
        for key in _SEQUENCE_KEYS:
            fields[key] = _coerce_sequence(metadata.get(key))
        for key in _SCALAR_KEYS:
            if metadata.get(key) is not None:
                fields[key] = metadata[key]
        return Document(**fields)
