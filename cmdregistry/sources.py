"""Template sources that yield ``(name, body)`` pairs."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Mapping, Tuple

import requests
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from cmdregistry.config import Settings
from cmdregistry.db import SessionScope, make_engine, make_session_scope
from cmdregistry.errors import SourceUnavailable
from cmdregistry.models import CommandTemplate
from cmdregistry.schemas import TemplateRecord
from cmdregistry.util import logger

Entry = Tuple[str, str]

NAMESPACE_SEPARATOR = ":"
JSON_HEADERS = {"Accept": "application/json"}


class DirectorySource:
    """Markdown command files under a root directory.

    ``review.md`` becomes ``review``; ``git/commit.md`` becomes ``git:commit``.
    """

    def __init__(self, root: Path | str, suffix: str = ".md") -> None:
        self.root = Path(root)
        self.suffix = suffix

    def __repr__(self) -> str:
        return f"DirectorySource({str(self.root)!r})"

    def name_for(self, path: Path) -> str:
        relative = path.relative_to(self.root).with_suffix("")
        return NAMESPACE_SEPARATOR.join(relative.parts)

    def entries(self) -> Iterator[Entry]:
        if not self.root.is_dir():
            raise SourceUnavailable(self, "not a directory")
        paths = sorted(p for p in self.root.rglob(f"*{self.suffix}") if p.is_file())
        logger.info("Reading %s template files from %s", len(paths), self.root)
        for path in paths:
            try:
                body = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise SourceUnavailable(self, f"cannot read {path}: {exc}") from exc
            yield self.name_for(path), body


class MappingSource:
    """In-memory pairs; a list of pairs may repeat a name."""

    def __init__(self, items: Mapping[str, str] | Iterable[Entry]) -> None:
        if isinstance(items, Mapping):
            self.items: List[Entry] = list(items.items())
        else:
            self.items = list(items)

    def __repr__(self) -> str:
        return f"MappingSource({len(self.items)} entries)"

    def entries(self) -> Iterator[Entry]:
        return iter(self.items)


class SqlSource:
    """Rows of the ``command_templates`` table."""

    def __init__(self, session_scope: SessionScope) -> None:
        self.session_scope = session_scope

    def __repr__(self) -> str:
        return "SqlSource(command_templates)"

    def entries(self) -> List[Entry]:
        try:
            with self.session_scope() as session:
                rows = session.scalars(select(CommandTemplate).order_by(CommandTemplate.id)).all()
                return [(row.name, row.body) for row in rows]
        except SQLAlchemyError as exc:
            raise SourceUnavailable(self, str(exc)) from exc


class HttpSource:
    """JSON list of ``{"name", "body"}`` objects served over HTTP."""

    def __init__(self, url: str, session: requests.Session | None = None, timeout: float = 10) -> None:
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def __repr__(self) -> str:
        return f"HttpSource({self.url!r})"

    def entries(self) -> List[Entry]:
        logger.info("[HTTP] fetching templates from %s", self.url)
        try:
            resp = self.session.get(self.url, headers=JSON_HEADERS, timeout=self.timeout)
        except requests.RequestException as exc:
            raise SourceUnavailable(self, str(exc)) from exc
        if resp.status_code >= 400:
            raise SourceUnavailable(self, f"HTTP {resp.status_code}: {resp.text[:200]}")
        try:
            payload = resp.json()
        except ValueError as exc:
            raise SourceUnavailable(self, "response is not JSON") from exc
        if not isinstance(payload, list):
            raise SourceUnavailable(self, "expected a JSON list of templates")
        try:
            records = [TemplateRecord.model_validate(item) for item in payload]
        except ValidationError as exc:
            raise SourceUnavailable(self, f"malformed template entry: {exc}") from exc
        return [(record.name, record.body) for record in records]


def source_from_settings(settings: Settings):
    kind = settings.source.lower()
    if kind == "directory":
        return DirectorySource(settings.template_dir, settings.template_suffix)
    if kind == "database":
        try:
            engine = make_engine(settings.database_url)
        except (SQLAlchemyError, ImportError) as exc:
            raise SourceUnavailable("database", str(exc)) from exc
        return SqlSource(make_session_scope(engine))
    if kind == "http":
        if not settings.source_url:
            raise SourceUnavailable("http", "CMDREG_SOURCE_URL not set")
        return HttpSource(settings.source_url, timeout=settings.http_timeout_seconds)
    raise SourceUnavailable(kind, "unknown source kind; expected directory, database or http")


__all__ = [
    "DirectorySource",
    "MappingSource",
    "SqlSource",
    "HttpSource",
    "source_from_settings",
]
