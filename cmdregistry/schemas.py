"""Pydantic schemas for templates, invocations and API payloads."""
from pydantic import BaseModel, ConfigDict, Field


def describe(body: str) -> str:
    for line in body.splitlines():
        stripped = line.strip()
        if stripped:
            return stripped.lstrip("#").strip()
    return ""


class Template(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    body: str

    @property
    def description(self) -> str:
        return describe(self.body)


class Invocation(BaseModel):
    name: str
    argument: str = ""


class TemplateSummary(BaseModel):
    name: str
    description: str


class TemplateOut(TemplateSummary):
    body: str


class ResolveRequest(Invocation):
    pass


class ResolveResponse(BaseModel):
    name: str
    text: str


class ReloadResponse(BaseModel):
    templates: int


class TemplateRecord(BaseModel):
    """Entry shape expected from remote template endpoints."""

    name: str = Field(min_length=1)
    body: str
