"""Resolve a command name and argument into expanded template text."""
from __future__ import annotations

from typing import Union

from cmdregistry.schemas import Invocation
from cmdregistry.store import Registry, TemplateStore
from cmdregistry.substitutor import DEFAULT_PLACEHOLDER, substitute
from cmdregistry.util import logger, preview


class CommandResolver:
    def __init__(self, registry: Union[Registry, TemplateStore], placeholder: str = DEFAULT_PLACEHOLDER) -> None:
        if not placeholder:
            raise ValueError("placeholder must be a non-empty string")
        self.registry = registry
        self.placeholder = placeholder

    def _snapshot(self) -> Registry:
        if isinstance(self.registry, TemplateStore):
            return self.registry.snapshot
        return self.registry

    def resolve(self, name: str, argument: str = "") -> str:
        """Expand template ``name`` with ``argument``; raises TemplateNotFound on miss."""
        template = self._snapshot().get(name)
        text = substitute(template.body, argument, self.placeholder)
        logger.debug("Resolved %s argument=%s -> %s", name, preview(argument), preview(text))
        return text

    def resolve_invocation(self, invocation: Invocation) -> str:
        return self.resolve(invocation.name, invocation.argument)


__all__ = ["CommandResolver"]
