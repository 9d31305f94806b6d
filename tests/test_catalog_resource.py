"""
Tests for catalog resource keys and request mapping.
"""

import pytest

from streamflix.entities import CatalogResource, ResourceKind


@pytest.mark.parametrize(
    "resource, key",
    [
        (CatalogResource.trending(), "trending"),
        (CatalogResource.popular_movies(), "popular"),
        (CatalogResource.movies_by_genre(28), "genre-28"),
        (CatalogResource.movie(603), "movie-603"),
        (CatalogResource.popular_tv(), "tv-popular"),
        (CatalogResource.top_rated_tv(), "tv-top-rated"),
        (CatalogResource.on_the_air_tv(), "tv-on-the-air"),
        (CatalogResource.airing_today_tv(), "tv-airing-today"),
        (CatalogResource.tv_by_genre(18), "tv-genre-18"),
        (CatalogResource.tv(1399), "tv-1399"),
        (CatalogResource.tv_season(1399, 2), "tv-1399-season-2"),
    ],
)
def test_cache_keys(resource, key):
    assert resource.cache_key == key


def test_movie_and_tv_with_same_id_have_distinct_keys():
    assert CatalogResource.movie(603).cache_key != CatalogResource.tv(603).cache_key


@pytest.mark.parametrize(
    "kind", [ResourceKind.SEARCH_MOVIES, ResourceKind.SEARCH_TV, ResourceKind.MULTI_SEARCH]
)
def test_searches_have_no_cache_key(kind):
    resource = CatalogResource.search(kind, "matrix")
    assert resource.is_search
    assert resource.cache_key is None


def test_search_strips_query():
    assert CatalogResource.search(ResourceKind.SEARCH_MOVIES, "  matrix ").query == "matrix"


@pytest.mark.parametrize("query", ["", "   "])
def test_search_rejects_blank_query(query):
    with pytest.raises(ValueError, match="Query parameter is required"):
        CatalogResource.search(ResourceKind.SEARCH_TV, query)


def test_search_rejects_non_search_kind():
    with pytest.raises(ValueError):
        CatalogResource.search(ResourceKind.TRENDING, "matrix")


def test_trending_request_has_no_page():
    [request] = CatalogResource.trending().tmdb_requests("fr-FR")
    assert request.path == "/trending/all/week"
    assert request.params == {"language": "fr-FR"}


def test_list_requests_ask_for_first_page():
    [request] = CatalogResource.top_rated_tv().tmdb_requests("fr-FR")
    assert request.path == "/tv/top_rated"
    assert request.params == {"language": "fr-FR", "page": "1"}


def test_genre_request_uses_discover():
    [request] = CatalogResource.movies_by_genre(28).tmdb_requests("fr-FR")
    assert request.path == "/discover/movie"
    assert request.params["with_genres"] == "28"


def test_details_fan_out_into_three_labelled_requests():
    requests = CatalogResource.movie(603).tmdb_requests("fr-FR")

    assert [(r.label, r.path) for r in requests] == [
        ("movie", "/movie/603"),
        ("credits", "/movie/603/credits"),
        ("videos", "/movie/603/videos"),
    ]
    assert requests[1].params == {}
    assert requests[2].params == {"language": "fr-FR"}


def test_tv_details_label_the_record_show():
    requests = CatalogResource.tv(1399).tmdb_requests("fr-FR")
    assert [r.label for r in requests] == ["show", "credits", "videos"]


def test_search_request_carries_query():
    resource = CatalogResource.search(ResourceKind.MULTI_SEARCH, "dune")
    [request] = resource.tmdb_requests("fr-FR")

    assert request.path == "/search/multi"
    assert request.params["query"] == "dune"


@pytest.mark.parametrize(
    "resource, path",
    [
        (CatalogResource.trending(), "/trending"),
        (CatalogResource.popular_movies(), "/popular"),
        (CatalogResource.movies_by_genre(28), "/genre/28"),
        (CatalogResource.movie(603), "/movie/603"),
        (CatalogResource.tv_by_genre(18), "/tv/genre/18"),
        (CatalogResource.tv(1399), "/tv/1399"),
        (CatalogResource.tv_season(1399, 2), "/tv/1399/season/2"),
        (CatalogResource.search(ResourceKind.SEARCH_MOVIES, "x"), "/search"),
        (CatalogResource.search(ResourceKind.SEARCH_TV, "x"), "/tv/search"),
        (CatalogResource.search(ResourceKind.MULTI_SEARCH, "x"), "/multi-search"),
    ],
)
def test_proxy_paths(resource, path):
    assert resource.proxy_request().path == path
