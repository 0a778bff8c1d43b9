import logging
import traceback
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Path, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, load_config
from database import CoupletStore
from errors import ApiError, NotFoundError, StoreError
from projection import filter_translations, project_page
from query import build_search_query
from translators import build_translator_directory
from validators import (
    HierarchyFilters,
    Language,
    PageParams,
    search_term,
    translator_ids,
    validation_details,
)

logger = logging.getLogger(__name__)


def get_store(request: Request) -> CoupletStore:
    return request.app.state.store


def _pagination(meta, total_key: str, total: int) -> dict:
    return {
        "currentPage": meta.currentPage,
        "totalPages": meta.totalPages,
        total_key: total,
        "hasNext": meta.hasNext,
        "hasPrev": meta.hasPrev,
    }


couplets_router = APIRouter(tags=["couplets"])
translators_router = APIRouter(tags=["translators"])


@couplets_router.get("")
def list_couplets(
    pages: PageParams = Depends(),
    translators: List[str] = Depends(translator_ids),
    store: CoupletStore = Depends(get_store),
):
    documents = store.find({})
    total = store.count({})
    couplets, meta = project_page(documents, total, pages.page, pages.limit, translators)
    return {
        "success": True,
        "couplets": couplets,
        "pagination": _pagination(meta, "totalCouplets", total),
    }


# Registered before /{number} so "search" is not parsed as a couplet number
@couplets_router.get("/search")
def search_couplets(
    term: Optional[str] = Depends(search_term),
    filters: HierarchyFilters = Depends(),
    pages: PageParams = Depends(),
    translators: List[str] = Depends(translator_ids),
    store: CoupletStore = Depends(get_store),
):
    query = build_search_query(term, filters.division, filters.section, filters.chapter)
    documents = store.find(query)
    total = store.count(query)
    couplets, meta = project_page(documents, total, pages.page, pages.limit, translators)
    logger.debug("search %r matched %d couplets", term, total)
    return {
        "success": True,
        "couplets": couplets,
        "pagination": _pagination(meta, "totalResults", total),
        "filters": {
            "division": filters.division,
            "chapter": filters.chapter,
            "section": filters.section,
            "searchTerm": term.lower() if term else None,
            "translators": translators or None,
        },
    }


@couplets_router.get("/{number}")
def get_couplet(
    number: int = Path(..., ge=1, description="Couplet number"),
    translators: List[str] = Depends(translator_ids),
    store: CoupletStore = Depends(get_store),
):
    couplet = store.find_one(number)
    if not couplet:
        raise NotFoundError("Couplet not found")
    if translators:
        couplet = filter_translations(couplet, translators)
    return {"success": True, **couplet}


@translators_router.get("")
def list_translators(
    lang: Optional[Language] = Query(None, description="Restrict to one language"),
    store: CoupletStore = Depends(get_store),
):
    directory = build_translator_directory(store.find({}), lang)
    return {
        "success": True,
        "translators": {
            code: [t.model_dump() for t in entries] for code, entries in directory.items()
        },
    }


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        body = exc.payload()
        if isinstance(exc, StoreError):
            logger.error("Store error on %s %s: %s", request.method, request.url.path, exc.detail)
            if settings.is_development:
                body["details"] = exc.detail
                body["stack"] = "".join(traceback.format_exception(exc))
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        body = {
            "success": False,
            "error": "Validation failed",
            "details": validation_details(exc.errors()),
        }
        return JSONResponse(status_code=400, content=body)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            body = {
                "success": False,
                "error": "Resource not found",
                "path": str(request.url.path),
                "method": request.method,
            }
        else:
            body = {"success": False, "error": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        body = {"success": False, "error": "Internal server error"}
        if settings.is_development:
            body["details"] = str(exc)
        return JSONResponse(status_code=500, content=body)


def create_app(settings: Optional[Settings] = None, store: Optional[CoupletStore] = None) -> FastAPI:
    """Build the API. Without ``store`` the configured MongoDB collection is opened on startup."""
    settings = settings or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_store = app.state.store is None
        if owns_store:
            app.state.store = CoupletStore.connect(settings)
        try:
            app.state.store.ensure_indexes()
        except StoreError as e:
            # reads fail per request until the store is reachable
            logger.warning("Could not ensure indexes at startup: %s", e.detail)
        try:
            yield
        finally:
            if owns_store:
                app.state.store.close()
                app.state.store = None

    app = FastAPI(
        title="Thirukkural API",
        docs_url="/api-docs",
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info("%s %s -> %d", request.method, request.url.path, response.status_code)
        return response

    @app.get("/")
    def read_root():
        return {"message": "Thirukkural API running"}

    @app.get("/health")
    def health(store: CoupletStore = Depends(get_store)):
        response = {
            "backend": "running",
            "database": "unavailable",
            "database_name": settings.database_name,
            "couplets": None,
        }
        if store.ping():
            response["database"] = "connected"
            response["couplets"] = store.count()
        return response

    app.include_router(couplets_router, prefix=f"{settings.api_prefix}/couplets")
    app.include_router(translators_router, prefix=f"{settings.api_prefix}/translators")
    register_error_handlers(app, settings)
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = app.state.settings
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port)
