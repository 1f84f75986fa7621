"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from photo_studio.api.admin import router as admin_router
from photo_studio.api.models import BookingOut, BookingRequest, PhotoOut
from photo_studio.app_logging import configure_logging
from photo_studio.containers import AppContainer
from photo_studio.domain.bookings import BookingForm
from photo_studio.domain.photos import ALL_CATEGORIES, Photo, PhotoCategory
from photo_studio.errors import StudioError
from photo_studio.services.bookings import SubmissionStatus


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.content.load()
        if app.state.container.content.schema_missing:
            logger.warning("Database tables are missing; see /admin/status")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(StudioError)
    async def studio_error_handler(request: Request, exc: StudioError) -> JSONResponse:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message, "details": exc.details},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/photos")
    async def list_photos(
        request: Request, category: str = ALL_CATEGORIES
    ) -> dict[str, object]:
        """Return gallery photos, optionally filtered by category."""
        state_container: AppContainer = request.app.state.container
        photos = state_container.content.gallery(category)
        return {"photos": [_photo_json(photo) for photo in photos]}

    @app.get("/photos/highlights")
    async def list_highlights(request: Request) -> dict[str, object]:
        """Return photos for the home page highlight strip."""
        state_container: AppContainer = request.app.state.container
        photos = state_container.content.highlights()
        return {"photos": [_photo_json(photo) for photo in photos]}

    @app.get("/categories")
    async def list_categories(request: Request) -> dict[str, object]:
        """Return gallery filter options."""
        state_container: AppContainer = request.app.state.container
        return {"categories": state_container.content.categories()}

    @app.get("/packages/covers")
    async def package_covers(request: Request) -> dict[str, object]:
        """Return the resolved cover image for each package category."""
        state_container: AppContainer = request.app.state.container
        covers = state_container.content.package_covers()
        return {
            "covers": {
                category.value: _photo_json(photo)
                for category, photo in covers.items()
            }
        }

    @app.get("/packages/{category}/cover")
    async def package_cover(category: str, request: Request) -> dict[str, object]:
        """Return the cover image for one package category."""
        state_container: AppContainer = request.app.state.container
        known = PhotoCategory.match(category)
        if known is None:
            return {"cover": None}
        cover = state_container.content.package_cover(known)
        return {"cover": _photo_json(cover) if cover else None}

    @app.get("/hero")
    async def hero_images(request: Request) -> dict[str, object]:
        """Return the hero slideshow images."""
        state_container: AppContainer = request.app.state.container
        return {"images": state_container.hero.images()}

    @app.post("/bookings", status_code=201, response_model=None)
    async def create_booking(
        payload: BookingRequest, request: Request
    ) -> JSONResponse | dict[str, object]:
        """Submit a booking request."""
        state_container: AppContainer = request.app.state.container
        workflow = state_container.booking_service.new_workflow(
            BookingForm(**payload.model_dump())
        )
        booking = workflow.submit()
        if workflow.status is SubmissionStatus.ERROR or booking is None:
            return JSONResponse(
                status_code=502,
                content={
                    "status": workflow.status.value,
                    "error": workflow.error,
                },
            )
        return {
            "status": workflow.status.value,
            "booking": BookingOut.from_domain(booking).model_dump(mode="json"),
        }

    return app


def _photo_json(photo: Photo) -> dict[str, object]:
    return PhotoOut.from_domain(photo).model_dump(mode="json")
