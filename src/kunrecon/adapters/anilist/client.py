"""AniList GraphQL client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from kunrecon.adapters.http_resilience import ResilientClient

from .schema import AniListData, AniListMedia, AniListMediaType, AniListResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from kunrecon.config.anilist import AniListConfig
    from kunrecon.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

MEDIA_FIELDS = """
  id
  idMal
  type
  format
  status
  title { romaji english native }
  synonyms
  description
  season
  seasonYear
  startDate { year month day }
  episodes
  duration
  chapters
  volumes
  coverImage { extraLarge large medium }
  genres
  siteUrl
  studios { nodes { name isAnimationStudio } }
  staff(perPage: 25) { edges { role node { name { full native } primaryOccupations } } }
  characters(perPage: 25, sort: [ROLE, RELEVANCE]) {
    edges {
      role
      node { name { full native } }
      voiceActors(language: JAPANESE) { name { full native } languageV2 }
    }
  }
  externalLinks { url site type }
"""

SEARCH_QUERY = f"""
query ($search: String, $type: MediaType, $perPage: Int) {{
  Page(page: 1, perPage: $perPage) {{
    media(search: $search, type: $type) {{ {MEDIA_FIELDS} }}
  }}
}}
"""

MEDIA_QUERY = f"""
query ($id: Int) {{
  Media(id: $id) {{ {MEDIA_FIELDS} }}
}}
"""


class AniListAPIError(RuntimeError):
    """Raised when AniList answers with GraphQL errors or an unusable payload."""


class AniListClient:
    """Low-level client for the AniList GraphQL endpoint.

    The underlying HTTP client is created on first use and kept until ``aclose``
    so the rate limiter spans every call.
    """

    def __init__(
        self,
        *,
        config: AniListConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._http: ResilientClient | None = None

    @property
    def per_page(self) -> int:
        return self._config.per_page

    async def search_media(
        self,
        *,
        search: str,
        media_type: AniListMediaType,
        per_page: int | None = None,
    ) -> list[AniListMedia]:
        data = await self._execute(
            SEARCH_QUERY,
            {"search": search, "type": str(media_type), "perPage": per_page or self.per_page},
        )
        if data is None or data.page is None:
            return []
        return data.page.media

    async def fetch_media(self, *, media_id: int) -> AniListMedia | None:
        data = await self._execute(MEDIA_QUERY, {"id": media_id})
        if data is None:
            return None
        return data.media

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def _execute(self, query: str, variables: dict[str, object]) -> AniListData | None:
        if self._http is None:
            self._http = self._client_factory(self._resilience)
        response = await self._http.post("", json={"query": query, "variables": variables})
        try:
            payload = response.json()
        except ValueError:
            response.raise_for_status()
            raise AniListAPIError("AniList returned a non-JSON payload") from None

        parsed = AniListResponse.model_validate(payload)
        if parsed.errors:
            if all(error.status == 404 for error in parsed.errors):
                return None
            messages = "; ".join(error.message for error in parsed.errors)
            log.warning("AniList GraphQL errors: %s", messages)
            raise AniListAPIError(messages)
        response.raise_for_status()
        return parsed.data
