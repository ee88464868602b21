"""AniList fetcher behaviour over a mocked GraphQL endpoint."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx

from kunrecon.adapters.anilist import AniListMediaType, build_anilist_fetcher
from kunrecon.domain.model import SourceName
from kunrecon.domain.ports import FetchErrorKind, FetchFailed, FetchFound, FetchNotFound

from tests.helpers.http import mock_client_factory, request_json

if TYPE_CHECKING:
    from kunrecon.adapters.anilist import AniListFetcher
    from kunrecon.config.anilist import AniListConfig
    from kunrecon.domain.ports import FetchResult


def _fetcher(
    config: AniListConfig,
    responses: list[httpx.Response],
    requests: list[httpx.Request],
    *,
    media_type: AniListMediaType = AniListMediaType.ANIME,
) -> AniListFetcher:
    answers = iter(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return next(answers)

    return build_anilist_fetcher(
        media_type=media_type, config=config, client_factory=mock_client_factory(handler)
    )


def _run(fetcher: AniListFetcher, call: str, *args: object, **kwargs: object) -> FetchResult:
    async def go() -> FetchResult:
        try:
            return await getattr(fetcher, call)(*args, **kwargs)
        finally:
            await fetcher.aclose()

    return asyncio.run(go())


def test_search_by_title(
    anilist_config: AniListConfig, frieren_payload: dict[str, object]
) -> None:
    requests: list[httpx.Request] = []
    response = httpx.Response(200, json={"data": {"Page": {"media": [frieren_payload]}}})
    fetcher = _fetcher(anilist_config, [response], requests)

    result = _run(fetcher, "search_by_title", "Frieren", limit=3)

    assert isinstance(result, FetchFound)
    assert result.source is SourceName.ANILIST
    assert result.best.title == "Sousou no Frieren"
    (request,) = requests
    assert request.method == "POST"
    variables = request_json(request)["variables"]
    assert variables == {"search": "Frieren", "type": "ANIME", "perPage": 3}


def test_search_without_results_is_not_found(anilist_config: AniListConfig) -> None:
    response = httpx.Response(200, json={"data": {"Page": {"media": []}}})

    result = _run(_fetcher(anilist_config, [response], []), "search_by_title", "Zzyzx")

    assert isinstance(result, FetchNotFound)


def test_fetch_by_id(anilist_config: AniListConfig, frieren_payload: dict[str, object]) -> None:
    requests: list[httpx.Request] = []
    response = httpx.Response(200, json={"data": {"Media": frieren_payload}})

    result = _run(_fetcher(anilist_config, [response], requests), "fetch_by_id", "154587")

    assert isinstance(result, FetchFound)
    assert result.best.external_id == "154587"
    assert request_json(requests[0])["variables"] == {"id": 154587}


def test_fetch_by_id_graphql_not_found(anilist_config: AniListConfig) -> None:
    response = httpx.Response(
        404,
        json={"errors": [{"message": "Not Found.", "status": 404}], "data": {"Media": None}},
    )

    result = _run(_fetcher(anilist_config, [response], []), "fetch_by_id", "999999999")

    assert isinstance(result, FetchNotFound)


def test_fetch_by_non_numeric_id_skips_the_network(anilist_config: AniListConfig) -> None:
    requests: list[httpx.Request] = []

    result = _run(_fetcher(anilist_config, [], requests), "fetch_by_id", "frieren")

    assert isinstance(result, FetchNotFound)
    assert requests == []


def test_graphql_errors_fail_the_lookup(anilist_config: AniListConfig) -> None:
    response = httpx.Response(
        400, json={"errors": [{"message": "Invalid media type", "status": 400}], "data": None}
    )

    result = _run(_fetcher(anilist_config, [response], []), "search_by_title", "Frieren")

    assert isinstance(result, FetchFailed)
    assert result.error.kind is FetchErrorKind.PROVIDER
    assert "Invalid media type" in result.error.message


def test_server_errors_are_retried_then_reported(anilist_config: AniListConfig) -> None:
    requests: list[httpx.Request] = []
    responses = [httpx.Response(502, text="<html>Bad gateway</html>") for _ in range(2)]

    result = _run(_fetcher(anilist_config, responses, requests), "search_by_title", "Frieren")

    assert isinstance(result, FetchFailed)
    assert result.error.kind is FetchErrorKind.HTTP_STATUS
    assert len(requests) == 2


def test_isbn_lookup_searches_manga(
    anilist_config: AniListConfig, frieren_payload: dict[str, object]
) -> None:
    requests: list[httpx.Request] = []
    frieren_payload["type"] = "MANGA"
    response = httpx.Response(200, json={"data": {"Page": {"media": [frieren_payload]}}})

    result = _run(_fetcher(anilist_config, [response], requests), "fetch_by_isbn", "9782505120377")

    assert isinstance(result, FetchFound)
    variables = request_json(requests[0])["variables"]
    assert variables == {"search": "9782505120377", "type": "MANGA", "perPage": 1}
