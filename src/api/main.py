"""
FastAPI backend: dataset export, import and backups over the Neo4j-backed store.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from neo4j import GraphDatabase
from pydantic import BaseModel

from keepintouch.application import (
    CategoryRepository,
    CheckInRepository,
    ContactRepository,
    KeyValueStorage,
    ensure_default_categories,
)
from keepintouch.config import Settings, load_env
from keepintouch.infrastructure import (
    BackupService,
    JsonExporter,
    JsonImporter,
    KeyValueCategoryRepository,
    KeyValueCheckInRepository,
    KeyValueContactRepository,
    MalformedImportError,
    Neo4jStorage,
    PartialImportError,
    ensure_storage_constraint,
    write_backup_file,
)

load_env()
settings = Settings.from_env()

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=settings.log_level,
)
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repositories:
    contacts: ContactRepository
    categories: CategoryRepository
    check_ins: CheckInRepository


def build_repositories(storage: KeyValueStorage) -> Repositories:
    return Repositories(
        contacts=KeyValueContactRepository(storage),
        categories=KeyValueCategoryRepository(storage),
        check_ins=KeyValueCheckInRepository(storage),
    )


def _get_driver():
    return GraphDatabase.driver(
        settings.neo4j_uri, auth=(settings.neo4j_user, settings.neo4j_password)
    )


def _get_repositories(app: FastAPI) -> Repositories:
    if getattr(app.state, "repositories", None) is None:
        if getattr(app.state, "driver", None) is None:
            app.state.driver = _get_driver()
        storage = Neo4jStorage(
            app.state.driver,
            namespace=settings.namespace,
            quota_bytes=settings.storage_quota_bytes,
        )
        app.state.repositories = build_repositories(storage)
    return app.state.repositories


def _exporter(repos: Repositories) -> JsonExporter:
    return JsonExporter(repos.contacts, repos.categories, repos.check_ins)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.driver = None
    try:
        if getattr(app.state, "repositories", None) is None:
            app.state.driver = _get_driver()
            ensure_storage_constraint(app.state.driver)
            repos = _get_repositories(app)
            ensure_default_categories(repos.categories)
        logger.info("keepintouch API ready (namespace %r)", settings.namespace)
        yield
    finally:
        if getattr(app.state, "driver", None) is not None:
            app.state.driver.close()


app = FastAPI(title="keepintouch API", lifespan=lifespan)


class ImportSummary(BaseModel):
    contacts: int
    categories: int
    checkIns: int


class BackupCreated(BaseModel):
    filename: str


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: backup and restore ---


@app.get("/export")
def export_dataset(request: Request):
    repos = _get_repositories(request.app)
    return Response(
        content=_exporter(repos).export_as_string(),
        media_type="application/json",
    )


@app.post("/import", response_model=ImportSummary)
async def import_dataset(request: Request):
    """Restore a snapshot. 400 means nothing was written; 500 means a partial import."""
    raw = await request.body()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=400, detail="Invalid JSON format") from e
    repos = _get_repositories(request.app)
    importer = JsonImporter(repos.contacts, repos.categories, repos.check_ins)
    try:
        result = importer.import_from_string(text)
    except MalformedImportError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except PartialImportError as e:
        logger.error("Partial import: %s", e)
        return JSONResponse(
            status_code=500,
            content={
                "detail": str(e),
                "written": {
                    "contacts": e.contacts,
                    "categories": e.categories,
                    "checkIns": e.check_ins,
                },
            },
        )
    return ImportSummary(
        contacts=result.contacts,
        categories=result.categories,
        checkIns=result.check_ins,
    )


@app.post("/backup", response_model=BackupCreated, status_code=201)
def create_backup(request: Request):
    repos = _get_repositories(request.app)
    service = BackupService(_exporter(repos), write_backup_file(settings.backup_dir))
    filename = service.create_backup()
    return BackupCreated(filename=filename)
