from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from loguru import logger

from .config import load_settings
from .controller import RequestController
from .errors import PersonNotFound, UpstreamError
from .schemas.person_schemas import ErrorResponse, Person, PersonSearchResult
from .utils.logging import setup_logging


def get_controller(request: Request) -> RequestController:
    return request.app.state.controller


def create_app(controller: Optional[RequestController] = None) -> FastAPI:
    """
    Build the FastAPI application.

    :param controller: Pre-built controller. When omitted, settings are
        loaded and the controller is built on startup.
    :return: The configured application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, 'controller', None) is None:
            settings = load_settings()
            setup_logging(settings.log_level)
            app.state.controller = RequestController(settings)
        yield
        await app.state.controller.aclose()

    app = FastAPI(title='Six Degrees', lifespan=lifespan)
    app.state.controller = controller

    @app.get('/person/{person_id}', response_model=Person,
             responses={404: {'model': ErrorResponse},
                        502: {'model': ErrorResponse}})
    async def person_detail(
        person_id: int,
        controller: RequestController = Depends(get_controller)
    ):
        try:
            return await controller.person_client.get_by_id(person_id)
        except PersonNotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
        except UpstreamError as e:
            logger.debug("Person lookup {} failed: {}", person_id, e)
            raise HTTPException(
                status_code=502, detail=f"TMDB service error: {str(e)}")

    @app.get('/search/person/{query:path}', response_model=PersonSearchResult,
             responses={502: {'model': ErrorResponse}})
    async def person_search(
        query: str,
        controller: RequestController = Depends(get_controller)
    ):
        try:
            return await controller.person_client.search(query)
        except UpstreamError as e:
            logger.debug("Person search {!r} failed: {}", query, e)
            raise HTTPException(
                status_code=502, detail=f"TMDB service error: {str(e)}")

    return app


app = create_app()


def run() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)
    uvicorn.run(
        create_app(RequestController(settings)),
        host=settings.host,
        port=settings.port,
    )
