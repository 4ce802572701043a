from typing import Type, TypeVar
from urllib.parse import quote, urlencode

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from ..errors import UpstreamParseError, UpstreamStatusError

BEARER = 'Bearer'

ModelT = TypeVar('ModelT', bound=BaseModel)


def build_auth_headers(token: str) -> httpx.Headers:
    """
    Build the default headers sent with every TMDB request.

    :param token: TMDB v4 read access token.
    :return: Headers carrying the bearer token.
    :raises ValueError: If the token holds characters not allowed in a header.
    """
    if not token.isprintable():
        raise ValueError('token contains control characters')
    return httpx.Headers({
        'Authorization': f"{BEARER} {token}",
        'Accept': 'application/json',
    })


def build_details_url(details_url: str, person_id: int) -> str:
    return f"{details_url}/{person_id}"


def build_search_url(search_url: str, query: str) -> str:
    """
    Append the percent-encoded query to the search endpoint.
    Spaces are encoded as %20 rather than '+'.

    :param search_url: The /search/person endpoint.
    :param query: Raw search text from the caller.
    :return: The full request URL.
    """
    return f"{search_url}?{urlencode({'query': query}, quote_via=quote)}"


def raise_for_status(response: httpx.Response) -> None:
    """
    Raise UpstreamStatusError for any non-2xx response.

    :param response: Response returned by TMDB.
    """
    if response.is_success:
        return
    url = str(response.request.url)
    logger.warning("TMDB returned {} for {}", response.status_code, url)
    raise UpstreamStatusError(response.status_code, url)


def parse_model(response: httpx.Response, model: Type[ModelT]) -> ModelT:
    """
    Decode a TMDB response body into the given model.

    :param response: Successful response returned by TMDB.
    :param model: Pydantic model the body must match.
    :return: The validated model instance.
    :raises UpstreamParseError: If the body is not JSON or does not match the model.
    """
    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        logger.warning("Could not parse TMDB response as {}: {}",
                       model.__name__, e)
        raise UpstreamParseError(
            f"Unexpected TMDB response for {model.__name__}: {e}") from e
