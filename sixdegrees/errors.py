from typing import Optional


class SixDegreesError(Exception):
    """Base class for every error raised by the service."""


class ConfigError(SixDegreesError):
    """Configuration could not be loaded or is incomplete."""


class ClientInitError(SixDegreesError):
    """The upstream HTTP client could not be constructed."""


class PersonNotFound(SixDegreesError):
    def __init__(self, person_id: int):
        super().__init__(f"Person {person_id} not found")
        self.person_id = person_id


class UpstreamError(SixDegreesError):
    """Anything that went wrong while talking to TMDB."""


class UpstreamTransportError(UpstreamError):
    pass


class UpstreamStatusError(UpstreamTransportError):
    def __init__(self, status_code: int, url: str, message: Optional[str] = None):
        super().__init__(
            message or f"TMDB responded with status {status_code} for {url}")
        self.status_code = status_code
        self.url = url


class UpstreamParseError(UpstreamError):
    pass
