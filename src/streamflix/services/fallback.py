"""Placeholder payloads served by the server tier when TMDB is unavailable.

Every placeholder has the same shape as the real TMDB response for its
resource, so downstream consumers render it without special cases, and
carries ``"placeholder": True`` so they can tell it apart if they care.
Placeholders are built fresh on each call and are never cached.
"""

from datetime import date
from typing import Any

from streamflix.entities import CatalogResource, ResourceKind

_UNAVAILABLE_OVERVIEW = (
    "Contenu chargé depuis le cache local. L'API TMDB est actuellement limitée. "
    "Veuillez réessayer dans quelques minutes."
)


def _page(results: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "page": 1,
        "results": results,
        "total_pages": 1 if results else 0,
        "total_results": len(results),
        "placeholder": True,
    }


def _movie_item(title: str, overview: str, genre_ids: list[int]) -> dict[str, Any]:
    return {
        "id": 1,
        "title": title,
        "overview": overview,
        "release_date": date.today().isoformat(),
        "vote_average": 7.5,
        "poster_path": "/placeholder-poster.jpg",
        "backdrop_path": "/placeholder-backdrop.jpg",
        "genre_ids": genre_ids,
    }


def _tv_item(name: str, overview: str) -> dict[str, Any]:
    return {
        "id": 1,
        "name": name,
        "overview": overview,
        "first_air_date": date.today().isoformat(),
        "vote_average": 8.0,
        "poster_path": "/placeholder-poster.jpg",
        "backdrop_path": "/placeholder-backdrop.jpg",
        "genre_ids": [18, 9648],
    }


def _details(record_label: str, tmdb_id: int | None, title_field: str) -> dict[str, Any]:
    return {
        record_label: {
            "id": tmdb_id,
            title_field: "Contenu indisponible",
            "overview": _UNAVAILABLE_OVERVIEW,
            "genres": [],
            "poster_path": None,
            "backdrop_path": None,
        },
        "credits": {"id": tmdb_id, "cast": [], "crew": []},
        "videos": {"id": tmdb_id, "results": []},
        "placeholder": True,
    }


def placeholder_for(resource: CatalogResource) -> dict[str, Any]:
    """Build a well-formed stand-in payload for ``resource``.

    Args:
        resource: The resource whose upstream fetch failed

    Returns:
        A fresh dict shaped like the TMDB response for that resource
    """
    kind = resource.kind

    if kind == ResourceKind.TRENDING:
        return _page([_movie_item("Contenu temporaire - API limitée", _UNAVAILABLE_OVERVIEW, [28, 12, 878])])
    if kind == ResourceKind.POPULAR_MOVIES:
        return _page(
            [
                _movie_item(
                    "Films populaires - Cache local",
                    "Contenu chargé depuis le cache en raison de limitations API TMDB.",
                    [28, 12],
                )
            ]
        )
    if kind == ResourceKind.POPULAR_TV:
        return _page([_tv_item("Séries populaires - Cache", "Contenu TMDB chargé depuis le cache local.")])
    if kind == ResourceKind.MOVIE_DETAILS:
        return _details("movie", resource.tmdb_id, "title")
    if kind == ResourceKind.TV_DETAILS:
        return _details("show", resource.tmdb_id, "name")
    if kind == ResourceKind.TV_SEASON:
        return {
            "id": None,
            "name": f"Saison {resource.season}",
            "season_number": resource.season,
            "overview": _UNAVAILABLE_OVERVIEW,
            "episodes": [],
            "placeholder": True,
        }

    # Remaining list resources and searches degrade to an empty page
    return _page([])
