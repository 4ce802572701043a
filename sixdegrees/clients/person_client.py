from typing import Optional

import httpx
from loguru import logger

from ..config import Settings
from ..errors import ClientInitError, PersonNotFound, UpstreamTransportError
from ..schemas.person_schemas import Person, PersonSearchResult
from ..utils.utils_person_client import (
    build_auth_headers,
    build_details_url,
    build_search_url,
    parse_model,
    raise_for_status,
)


class PersonClient:
    """
    Thin async wrapper around the TMDB person endpoints.

    One instance owns one httpx.AsyncClient whose default headers carry the
    bearer token. Nothing on it is mutated after construction, so a single
    instance is shared by all concurrent requests.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        token = settings.api_token.get_secret_value()
        if not token.strip():
            raise ClientInitError("TMDB API token is empty")
        try:
            headers = build_auth_headers(token)
        except (UnicodeEncodeError, ValueError) as e:
            raise ClientInitError(
                "could not build the TMDB authorization header") from e

        self.search_url = f"{settings.base_url}/search/person"
        self.details_url = f"{settings.base_url}/person"
        self._client = httpx.AsyncClient(
            headers=headers,
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def _get(self, url: str) -> httpx.Response:
        try:
            response = await self._client.get(url)
        except httpx.RequestError as e:
            logger.warning("TMDB request to {} failed: {!r}", url, e)
            raise UpstreamTransportError(
                f"Could not reach TMDB: {e!r}") from e
        logger.debug("GET {} -> {}", url, response.status_code)
        return response

    async def get_by_id(self, person_id: int) -> Person:
        """
        Fetch a single person by TMDB id.

        :param person_id: TMDB person id.
        :return: The person's details.
        :raises PersonNotFound: If TMDB answers 404.
        :raises UpstreamError: On transport, status or parse failures.
        """
        response = await self._get(
            build_details_url(self.details_url, person_id))
        if response.status_code == 404:
            raise PersonNotFound(person_id)
        raise_for_status(response)
        return parse_model(response, Person)

    async def search(self, query: str) -> PersonSearchResult:
        """
        Search TMDB people by name.

        :param query: Free text, percent-encoded before forwarding.
        :return: The first page of TMDB's search envelope.
        :raises UpstreamError: On transport, status or parse failures.
        """
        response = await self._get(build_search_url(self.search_url, query))
        raise_for_status(response)
        return parse_model(response, PersonSearchResult)

    async def aclose(self) -> None:
        await self._client.aclose()
