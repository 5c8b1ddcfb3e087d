"""Template store: immutable registry snapshots and atomic reloads."""
from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Tuple

from cmdregistry.errors import DuplicateName, InvalidTemplate, SourceUnavailable, TemplateNotFound
from cmdregistry.schemas import Template
from cmdregistry.util import logger


class Registry:
    """Read-only mapping of template names to templates."""

    __slots__ = ("_templates",)

    def __init__(self, templates: Mapping[str, Template]) -> None:
        self._templates = MappingProxyType(dict(templates))

    def get(self, name: str) -> Template:
        try:
            return self._templates[name]
        except KeyError:
            raise TemplateNotFound(name) from None

    def names(self) -> List[str]:
        return sorted(self._templates)

    def templates(self) -> Mapping[str, Template]:
        return self._templates

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __repr__(self) -> str:
        return f"Registry({len(self)} templates)"


def _entries_of(source: Any) -> Iterable[Tuple[str, str]]:
    entries = getattr(source, "entries", None)
    if callable(entries):
        return entries()
    if isinstance(source, Mapping):
        return source.items()
    return source


def load(source: Any) -> Registry:
    """Build a Registry from ``source``.

    ``source`` is a mapping of names to bodies, an iterable of ``(name, body)``
    pairs, or an object with an ``entries()`` method returning one. Raises
    SourceUnavailable when the source cannot be read, DuplicateName on a
    repeated name and InvalidTemplate on a malformed entry. Nothing is
    returned on failure.
    """
    templates: Dict[str, Template] = {}
    try:
        for entry in _entries_of(source):
            if isinstance(entry, (str, bytes)):
                raise InvalidTemplate(entry, "expected a (name, body) pair")
            try:
                name, body = entry
            except (TypeError, ValueError) as exc:
                raise InvalidTemplate(entry, "expected a (name, body) pair") from exc
            if not isinstance(name, str) or not name:
                raise InvalidTemplate(name, "name must be a non-empty string")
            if not isinstance(body, str):
                raise InvalidTemplate(name, "body must be a string")
            if name in templates:
                raise DuplicateName(name)
            templates[name] = Template(name=name, body=body)
    except OSError as exc:
        raise SourceUnavailable(source, str(exc)) from exc
    registry = Registry(templates)
    logger.info("Loaded %s templates from %r", len(registry), source)
    return registry


class TemplateStore:
    """Holds the published Registry snapshot for a source."""

    def __init__(self, source: Any, registry: Registry | None = None) -> None:
        self.source = source
        self._reload_lock = threading.Lock()
        self._snapshot = registry if registry is not None else load(source)

    @property
    def snapshot(self) -> Registry:
        return self._snapshot

    def get(self, name: str) -> Template:
        return self._snapshot.get(name)

    def reload(self) -> Registry:
        with self._reload_lock:
            # load() raises before anything is published
            fresh = load(self.source)
            self._snapshot = fresh
        return fresh


__all__ = ["Registry", "TemplateStore", "load"]
