"""Catalog resource domain entity.

A ``CatalogResource`` names one logical metadata request ("popular movies",
"season 2 of show 1399"). It owns the mapping from that request to a cache
key and to the concrete HTTP requests each tier issues.
"""

from dataclasses import dataclass, field
from enum import Enum


class ResourceKind(str, Enum):
    TRENDING = "trending"
    POPULAR_MOVIES = "popular"
    MOVIES_BY_GENRE = "genre"
    MOVIE_DETAILS = "movie"
    SEARCH_MOVIES = "search-movies"
    POPULAR_TV = "tv-popular"
    TOP_RATED_TV = "tv-top-rated"
    ON_THE_AIR_TV = "tv-on-the-air"
    AIRING_TODAY_TV = "tv-airing-today"
    TV_BY_GENRE = "tv-genre"
    TV_DETAILS = "tv"
    TV_SEASON = "tv-season"
    SEARCH_TV = "search-tv"
    MULTI_SEARCH = "multi-search"


# Unparameterized kinds: (cache key, TMDB path, proxy path)
_FLAT_KINDS: dict[ResourceKind, tuple[str, str, str]] = {
    ResourceKind.TRENDING: ("trending", "/trending/all/week", "/trending"),
    ResourceKind.POPULAR_MOVIES: ("popular", "/movie/popular", "/popular"),
    ResourceKind.POPULAR_TV: ("tv-popular", "/tv/popular", "/tv/popular"),
    ResourceKind.TOP_RATED_TV: ("tv-top-rated", "/tv/top_rated", "/tv/top_rated"),
    ResourceKind.ON_THE_AIR_TV: ("tv-on-the-air", "/tv/on_the_air", "/tv/on_the_air"),
    ResourceKind.AIRING_TODAY_TV: ("tv-airing-today", "/tv/airing_today", "/tv/airing_today"),
}

# Search kinds: (TMDB path, proxy path)
_SEARCH_KINDS: dict[ResourceKind, tuple[str, str]] = {
    ResourceKind.SEARCH_MOVIES: ("/search/movie", "/search"),
    ResourceKind.SEARCH_TV: ("/search/tv", "/tv/search"),
    ResourceKind.MULTI_SEARCH: ("/search/multi", "/multi-search"),
}

_LIST_KINDS = frozenset(_FLAT_KINDS) | frozenset(_SEARCH_KINDS) | {
    ResourceKind.MOVIES_BY_GENRE,
    ResourceKind.TV_BY_GENRE,
}


@dataclass(frozen=True)
class UpstreamRequest:
    """One HTTP GET against an upstream, relative to the client's base URL.

    ``label`` names the part of a composite payload this request fills
    ("movie", "credits", ...); it is empty for single-request resources.
    """

    path: str
    params: dict[str, str] = field(default_factory=dict, hash=False)
    label: str = ""


@dataclass(frozen=True)
class CatalogResource:
    """A logical metadata request.

    Use the named constructors (``CatalogResource.movie(603)``) rather than
    building instances by hand; they enforce which parameters each kind takes.
    """

    kind: ResourceKind
    tmdb_id: int | None = None
    season: int | None = None
    query: str | None = None

    @classmethod
    def trending(cls) -> "CatalogResource":
        return cls(ResourceKind.TRENDING)

    @classmethod
    def popular_movies(cls) -> "CatalogResource":
        return cls(ResourceKind.POPULAR_MOVIES)

    @classmethod
    def movies_by_genre(cls, genre_id: int) -> "CatalogResource":
        return cls(ResourceKind.MOVIES_BY_GENRE, tmdb_id=genre_id)

    @classmethod
    def movie(cls, movie_id: int) -> "CatalogResource":
        return cls(ResourceKind.MOVIE_DETAILS, tmdb_id=movie_id)

    @classmethod
    def popular_tv(cls) -> "CatalogResource":
        return cls(ResourceKind.POPULAR_TV)

    @classmethod
    def top_rated_tv(cls) -> "CatalogResource":
        return cls(ResourceKind.TOP_RATED_TV)

    @classmethod
    def on_the_air_tv(cls) -> "CatalogResource":
        return cls(ResourceKind.ON_THE_AIR_TV)

    @classmethod
    def airing_today_tv(cls) -> "CatalogResource":
        return cls(ResourceKind.AIRING_TODAY_TV)

    @classmethod
    def tv_by_genre(cls, genre_id: int) -> "CatalogResource":
        return cls(ResourceKind.TV_BY_GENRE, tmdb_id=genre_id)

    @classmethod
    def tv(cls, show_id: int) -> "CatalogResource":
        return cls(ResourceKind.TV_DETAILS, tmdb_id=show_id)

    @classmethod
    def tv_season(cls, show_id: int, season: int) -> "CatalogResource":
        return cls(ResourceKind.TV_SEASON, tmdb_id=show_id, season=season)

    @classmethod
    def search(cls, kind: ResourceKind, query: str) -> "CatalogResource":
        """Build a search resource; the query must contain something besides whitespace."""
        if kind not in _SEARCH_KINDS:
            raise ValueError(f"{kind.value} is not a search resource")
        if not query or not query.strip():
            raise ValueError("Query parameter is required")
        return cls(kind, query=query.strip())

    @property
    def is_search(self) -> bool:
        return self.kind in _SEARCH_KINDS

    @property
    def is_list(self) -> bool:
        """Whether consumers expect a ``results`` list from this resource."""
        return self.kind in _LIST_KINDS

    @property
    def cache_key(self) -> str | None:
        """Deterministic cache key, or None for searches (never cached)."""
        if self.kind in _FLAT_KINDS:
            return _FLAT_KINDS[self.kind][0]
        if self.kind == ResourceKind.MOVIES_BY_GENRE:
            return f"genre-{self.tmdb_id}"
        if self.kind == ResourceKind.MOVIE_DETAILS:
            return f"movie-{self.tmdb_id}"
        if self.kind == ResourceKind.TV_BY_GENRE:
            return f"tv-genre-{self.tmdb_id}"
        if self.kind == ResourceKind.TV_DETAILS:
            return f"tv-{self.tmdb_id}"
        if self.kind == ResourceKind.TV_SEASON:
            return f"tv-{self.tmdb_id}-season-{self.season}"
        return None

    def tmdb_requests(self, language: str) -> list[UpstreamRequest]:
        """HTTP requests the server tier sends to TMDB for this resource.

        Details resources fan out into the record itself plus its credits
        and videos; everything else is a single request.
        """
        lang = {"language": language}
        first_page = {"language": language, "page": "1"}

        if self.kind == ResourceKind.TRENDING:
            return [UpstreamRequest("/trending/all/week", lang)]
        if self.kind in _FLAT_KINDS:
            return [UpstreamRequest(_FLAT_KINDS[self.kind][1], first_page)]
        if self.kind == ResourceKind.MOVIES_BY_GENRE:
            return [UpstreamRequest("/discover/movie", {**first_page, "with_genres": str(self.tmdb_id)})]
        if self.kind == ResourceKind.TV_BY_GENRE:
            return [UpstreamRequest("/discover/tv", {**first_page, "with_genres": str(self.tmdb_id)})]
        if self.kind == ResourceKind.MOVIE_DETAILS:
            return _details_requests("movie", "movie", self.tmdb_id, lang)
        if self.kind == ResourceKind.TV_DETAILS:
            return _details_requests("tv", "show", self.tmdb_id, lang)
        if self.kind == ResourceKind.TV_SEASON:
            return [UpstreamRequest(f"/tv/{self.tmdb_id}/season/{self.season}", lang)]

        tmdb_path, _ = _SEARCH_KINDS[self.kind]
        return [UpstreamRequest(tmdb_path, {**first_page, "query": self.query or ""})]

    def proxy_request(self) -> UpstreamRequest:
        """The single request the client tier sends to the StreamFlix proxy."""
        if self.kind in _FLAT_KINDS:
            return UpstreamRequest(_FLAT_KINDS[self.kind][2])
        if self.kind == ResourceKind.MOVIES_BY_GENRE:
            return UpstreamRequest(f"/genre/{self.tmdb_id}")
        if self.kind == ResourceKind.TV_BY_GENRE:
            return UpstreamRequest(f"/tv/genre/{self.tmdb_id}")
        if self.kind == ResourceKind.MOVIE_DETAILS:
            return UpstreamRequest(f"/movie/{self.tmdb_id}")
        if self.kind == ResourceKind.TV_DETAILS:
            return UpstreamRequest(f"/tv/{self.tmdb_id}")
        if self.kind == ResourceKind.TV_SEASON:
            return UpstreamRequest(f"/tv/{self.tmdb_id}/season/{self.season}")

        _, proxy_path = _SEARCH_KINDS[self.kind]
        return UpstreamRequest(proxy_path, {"query": self.query or ""})

    def __str__(self) -> str:
        return self.cache_key or f"{self.kind.value}:{self.query}"


def _details_requests(
    segment: str, record_label: str, tmdb_id: int | None, lang: dict[str, str]
) -> list[UpstreamRequest]:
    base = f"/{segment}/{tmdb_id}"
    return [
        UpstreamRequest(base, lang, label=record_label),
        # credits take no language parameter
        UpstreamRequest(f"{base}/credits", {}, label="credits"),
        UpstreamRequest(f"{base}/videos", lang, label="videos"),
    ]
