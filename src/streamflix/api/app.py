from typing import Any

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from streamflix.api.dependencies import CatalogHandlerDep, EntitlementHandlerDep, lifespan
from streamflix.api.middleware import RequestIdMiddleware
from streamflix.config import settings
from streamflix.dto import (
    CacheClearResponse,
    DeviceLimitResponse,
    FeatureDecisionResponse,
    GatewayStatsResponse,
    HealthCheckResponse,
    PlanFeaturesResponse,
    QualityAccessResponse,
)
from streamflix.entities import CatalogResource, ResourceKind

app = FastAPI(
    title="StreamFlix Catalog API",
    description="Cached, rate-limited TMDB proxy and plan entitlement queries",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIdMiddleware)  # type: ignore[arg-type]


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "StreamFlix Catalog API",
        "version": "0.1.0",
        "description": "Cached, rate-limited TMDB proxy and plan entitlement queries",
        "endpoints": {
            "catalog": "/api/tmdb",
            "plans": "/api/plans",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: CatalogHandlerDep) -> HealthCheckResponse:
    return await handler.health_check()


# Movies


@app.get("/api/tmdb/trending")
async def trending(handler: CatalogHandlerDep) -> Any:
    return await handler.get(CatalogResource.trending())


@app.get("/api/tmdb/popular")
async def popular_movies(handler: CatalogHandlerDep) -> Any:
    return await handler.get(CatalogResource.popular_movies())


@app.get("/api/tmdb/genre/{genre_id}")
async def movies_by_genre(genre_id: int, handler: CatalogHandlerDep) -> Any:
    return await handler.get(CatalogResource.movies_by_genre(genre_id))


@app.get("/api/tmdb/movie/{movie_id}")
async def movie_details(movie_id: int, handler: CatalogHandlerDep) -> Any:
    """Movie record with credits and videos: ``{"movie", "credits", "videos"}``."""
    return await handler.get(CatalogResource.movie(movie_id))


@app.get("/api/tmdb/search")
async def search_movies(handler: CatalogHandlerDep, query: str | None = Query(None)) -> Any:
    return await handler.search(ResourceKind.SEARCH_MOVIES, query)


@app.get("/api/tmdb/multi-search")
async def multi_search(handler: CatalogHandlerDep, query: str | None = Query(None)) -> Any:
    return await handler.search(ResourceKind.MULTI_SEARCH, query)


# TV; literal paths are registered before /tv/{show_id}


@app.get("/api/tmdb/tv/popular")
async def popular_tv(handler: CatalogHandlerDep) -> Any:
    return await handler.get(CatalogResource.popular_tv())


@app.get("/api/tmdb/tv/top_rated")
async def top_rated_tv(handler: CatalogHandlerDep) -> Any:
    return await handler.get(CatalogResource.top_rated_tv())


@app.get("/api/tmdb/tv/on_the_air")
async def on_the_air_tv(handler: CatalogHandlerDep) -> Any:
    return await handler.get(CatalogResource.on_the_air_tv())


@app.get("/api/tmdb/tv/airing_today")
async def airing_today_tv(handler: CatalogHandlerDep) -> Any:
    return await handler.get(CatalogResource.airing_today_tv())


@app.get("/api/tmdb/tv/search")
async def search_tv(handler: CatalogHandlerDep, query: str | None = Query(None)) -> Any:
    return await handler.search(ResourceKind.SEARCH_TV, query)


@app.get("/api/tmdb/tv/genre/{genre_id}")
async def tv_by_genre(genre_id: int, handler: CatalogHandlerDep) -> Any:
    return await handler.get(CatalogResource.tv_by_genre(genre_id))


@app.get("/api/tmdb/tv/{show_id}")
async def tv_details(show_id: int, handler: CatalogHandlerDep) -> Any:
    """Show record with credits and videos: ``{"show", "credits", "videos"}``."""
    return await handler.get(CatalogResource.tv(show_id))


@app.get("/api/tmdb/tv/{show_id}/season/{season_number}")
async def tv_season(show_id: int, season_number: int, handler: CatalogHandlerDep) -> Any:
    return await handler.get(CatalogResource.tv_season(show_id, season_number))


# Cache management


@app.delete("/api/tmdb/cache", response_model=CacheClearResponse)
async def clear_cache(handler: CatalogHandlerDep) -> CacheClearResponse:
    """Drop every cached TMDB response."""
    return await handler.clear_cache()


@app.get("/api/tmdb/cache/stats", response_model=GatewayStatsResponse)
async def cache_stats(handler: CatalogHandlerDep) -> GatewayStatsResponse:
    return await handler.get_stats()


# Plans


@app.get("/api/plans", response_model=list[PlanFeaturesResponse])
async def list_plans(handler: EntitlementHandlerDep) -> list[PlanFeaturesResponse]:
    return await handler.list_plans()


@app.get("/api/plans/{plan_id}", response_model=PlanFeaturesResponse)
async def get_plan(plan_id: str, handler: EntitlementHandlerDep) -> PlanFeaturesResponse:
    """Features of a plan; unknown ids resolve to the free plan."""
    return await handler.get_plan(plan_id)


@app.get("/api/plans/{plan_id}/features/{feature}", response_model=FeatureDecisionResponse)
async def evaluate_feature(plan_id: str, feature: str, handler: EntitlementHandlerDep) -> FeatureDecisionResponse:
    return await handler.evaluate_feature(plan_id, feature)


@app.get("/api/plans/{plan_id}/quality/{quality}", response_model=QualityAccessResponse)
async def quality_access(plan_id: str, quality: str, handler: EntitlementHandlerDep) -> QualityAccessResponse:
    return await handler.quality_access(plan_id, quality)


@app.get("/api/plans/{plan_id}/devices", response_model=DeviceLimitResponse)
async def device_limit(
    plan_id: str,
    handler: EntitlementHandlerDep,
    current: int = Query(0, description="Devices already registered"),
) -> DeviceLimitResponse:
    return await handler.device_limit(plan_id, current)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "streamflix.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
