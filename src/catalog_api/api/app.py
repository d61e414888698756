from typing import Any

from fastapi import APIRouter, FastAPI, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware

from catalog_api import __version__
from catalog_api.api.dependencies import ItemHandlerDep, StatsHandlerDep, lifespan
from catalog_api.api.errors import setup_error_handlers
from catalog_api.config import Settings, settings, setup_logging
from catalog_api.dto import (
    CacheMetricsResponse,
    CreateItemRequest,
    ErrorResponse,
    HealthCheckResponse,
    ItemListResponse,
    ItemResponse,
    StatsResponse,
)
from catalog_api.repositories import RedisInvalidationNotifier

router = APIRouter()


@router.get(
    "/items",
    response_model=ItemListResponse,
    responses={400: {"model": ErrorResponse}},
)
async def list_items(
    handler: ItemHandlerDep,
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int | None = Query(None, ge=1, description="Page size"),
    q: str | None = Query(None, description="Case-insensitive name search"),
) -> ItemListResponse:
    """List items, optionally filtered by name, one page at a time."""
    return await handler.list_items(page, limit, q)


@router.get(
    "/items/{item_id}",
    response_model=ItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_item(item_id: str, handler: ItemHandlerDep) -> ItemResponse:
    """Get a single item by id."""
    return await handler.get_item(item_id)


@router.post(
    "/items",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_item(handler: ItemHandlerDep, request: CreateItemRequest | None = None) -> ItemResponse:
    """Create an item; name, category and price are all required."""
    return await handler.create_item(request or CreateItemRequest())


@router.get(
    "/stats",
    response_model=StatsResponse,
    responses={500: {"model": ErrorResponse}},
)
async def get_stats(handler: StatsHandlerDep) -> StatsResponse:
    """Get item count and average price."""
    return await handler.get_stats()


@router.get("/stats/cache", response_model=CacheMetricsResponse)
async def get_cache_metrics(handler: StatsHandlerDep) -> CacheMetricsResponse:
    """Get stats cache state and hit/miss counters."""
    return await handler.get_cache_metrics()


@router.get("/health", response_model=HealthCheckResponse)
async def health(request: Request) -> HealthCheckResponse:
    """Health check endpoint."""
    state = request.app.state
    source_available = state.source.exists()

    redis_healthy = None
    if isinstance(state.notifier, RedisInvalidationNotifier):
        redis_healthy = await state.notifier.is_available()

    healthy = source_available and redis_healthy is not False
    return HealthCheckResponse(
        status="healthy" if healthy else "unhealthy",
        source_available=source_available,
        watcher_running=state.watcher.is_running,
        redis_healthy=redis_healthy,
    )


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_settings: Settings to run with. Defaults to the environment.

    Returns:
        Configured FastAPI app; services are created by its lifespan
    """
    app_settings = app_settings or settings
    prefix = app_settings.api_prefix

    app = FastAPI(
        title="Catalog API",
        description="Paginated, searchable item catalog with cached aggregate stats",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=app_settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_error_handlers(app)
    app.include_router(router, prefix=prefix)

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "Catalog API",
            "version": __version__,
            "endpoints": {
                "items": f"{prefix}/items",
                "stats": f"{prefix}/stats",
                "cache": f"{prefix}/stats/cache",
                "health": f"{prefix}/health",
                "docs": "/docs",
            },
        }

    return app


app = create_app()


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    setup_logging()
    uvicorn.run(
        "catalog_api.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    main()
