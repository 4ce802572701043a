from typing import Optional

import httpx

from .clients.person_client import PersonClient
from .config import Settings, load_settings


class RequestController:
    """Holds the single PersonClient shared by the route handlers."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        if settings is None:
            settings = load_settings(env_only=True)
        self.settings = settings
        self.person_client = PersonClient(settings, transport=transport)

    async def aclose(self) -> None:
        await self.person_client.aclose()
