"""FastAPI entrypoint for the command template registry."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from cmdregistry.config import get_settings
from cmdregistry.errors import DuplicateName, InvalidTemplate, SourceUnavailable, TemplateNotFound
from cmdregistry.resolver import CommandResolver
from cmdregistry.schemas import ReloadResponse, ResolveRequest, ResolveResponse, TemplateOut, TemplateSummary
from cmdregistry.sources import source_from_settings
from cmdregistry.store import TemplateStore
from cmdregistry.util import logger

RELOAD_STATUS = {SourceUnavailable: 503, DuplicateName: 409, InvalidTemplate: 422}


def create_app(store: TemplateStore | None = None, placeholder: str | None = None) -> FastAPI:
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.store is None:
            app.state.store = TemplateStore(source_from_settings(settings))
        logger.info("Serving %s templates", len(app.state.store.snapshot))
        yield

    app = FastAPI(title="Command Template Registry", lifespan=lifespan)
    app.state.store = store
    app.state.placeholder = placeholder or settings.placeholder

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    def _store(request: Request) -> TemplateStore:
        current = request.app.state.store
        if current is None:
            raise HTTPException(status_code=503, detail="Templates not loaded")
        return current

    @app.get("/templates", response_model=List[TemplateSummary])
    def list_templates(request: Request):
        registry = _store(request).snapshot
        return [
            TemplateSummary(name=name, description=registry.get(name).description)
            for name in registry.names()
        ]

    @app.get("/templates/{name:path}", response_model=TemplateOut)
    def get_template(name: str, request: Request):
        try:
            template = _store(request).get(name)
        except TemplateNotFound as exc:
            logger.info("Unknown template requested: %s", exc.name)
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return TemplateOut(name=template.name, description=template.description, body=template.body)

    @app.post("/resolve", response_model=ResolveResponse)
    def resolve(payload: ResolveRequest, request: Request):
        resolver = CommandResolver(_store(request), request.app.state.placeholder)
        try:
            text = resolver.resolve_invocation(payload)
        except TemplateNotFound as exc:
            logger.info("Unknown command requested: %s", exc.name)
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return ResolveResponse(name=payload.name, text=text)

    @app.post("/reload", response_model=ReloadResponse)
    def reload(request: Request):
        store_ = _store(request)
        try:
            registry = store_.reload()
        except (SourceUnavailable, DuplicateName, InvalidTemplate) as exc:
            logger.warning("Reload from %r failed, keeping %r: %s", store_.source, store_.snapshot, exc)
            raise HTTPException(status_code=RELOAD_STATUS[type(exc)], detail=str(exc)) from exc
        return ReloadResponse(templates=len(registry))

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("cmdregistry.main:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
