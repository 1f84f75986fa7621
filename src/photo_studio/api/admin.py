"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from photo_studio.api.models import (
    BookingOut,
    HeroSlotRequest,
    ImagePayload,
    PhotoLinkRequest,
    PhotoOut,
    PhotoUploadRequest,
)
from photo_studio.domain.photos import PhotoUpload
from photo_studio.services.content import setup_instructions

if TYPE_CHECKING:
    from photo_studio.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/status", dependencies=[Depends(require_admin)])
async def admin_status(request: Request) -> dict[str, object]:
    """Report whether the database needs setting up."""
    container: AppContainer = request.app.state.container
    content = container.content
    return {
        "schema_missing": content.schema_missing,
        "setup_sql": setup_instructions(container.settings.storage_bucket)
        if content.schema_missing
        else None,
        "photos": len(content.photos),
        "bookings": len(content.bookings),
    }


@router.post("/reload", dependencies=[Depends(require_admin)])
async def admin_reload(request: Request) -> dict[str, object]:
    """Refresh the content cache from the store."""
    container: AppContainer = request.app.state.container
    container.content.load()
    return {"schema_missing": container.content.schema_missing}


@router.get("/bookings", dependencies=[Depends(require_admin)])
async def list_bookings(request: Request) -> dict[str, object]:
    """Return all booking requests, newest first."""
    container: AppContainer = request.app.state.container
    bookings = container.admin_service.list_bookings()
    return {
        "bookings": [
            BookingOut.from_domain(booking).model_dump(mode="json")
            for booking in bookings
        ]
    }


@router.post("/photos", status_code=201, dependencies=[Depends(require_admin)])
async def upload_photo(
    payload: PhotoUploadRequest, request: Request
) -> dict[str, object]:
    """Upload an image and record it as a portfolio photo."""
    container: AppContainer = request.app.state.container
    result = container.admin_service.upload(
        PhotoUpload(
            content=payload.image_bytes(),
            filename=payload.filename,
            caption=payload.caption,
            category=payload.category,
            is_highlight=payload.is_highlight,
            is_package_cover=payload.is_package_cover,
            content_type=payload.content_type,
        )
    )
    return {
        "photo": PhotoOut.from_domain(result.photo).model_dump(mode="json"),
        "report": result.report.as_dict(),
    }


@router.post(
    "/photos/link", status_code=201, dependencies=[Depends(require_admin)]
)
async def add_linked_photo(
    payload: PhotoLinkRequest, request: Request
) -> dict[str, object]:
    """Record a portfolio photo hosted at an external URL."""
    container: AppContainer = request.app.state.container
    result = container.admin_service.add_photo_from_url(
        image_url=payload.image_url,
        caption=payload.caption,
        category=payload.category,
        is_highlight=payload.is_highlight,
        is_package_cover=payload.is_package_cover,
    )
    return {
        "photo": PhotoOut.from_domain(result.photo).model_dump(mode="json"),
        "report": result.report.as_dict(),
    }


@router.delete("/photos/{photo_id}", dependencies=[Depends(require_admin)])
async def delete_photo(
    photo_id: str, request: Request, confirm: bool = False
) -> dict[str, object]:
    """Delete a photo; requires confirm=true."""
    container: AppContainer = request.app.state.container
    report = container.admin_service.delete_photo(photo_id, confirmed=confirm)
    return {"deleted": photo_id, "report": report.as_dict()}


@router.post("/captions", dependencies=[Depends(require_admin)])
async def generate_caption(payload: ImagePayload, request: Request) -> dict[str, str]:
    """Suggest a caption for an image."""
    container: AppContainer = request.app.state.container
    caption = await container.caption_service.generate(payload.image_bytes())
    return {"caption": caption}


@router.get("/hero", dependencies=[Depends(require_admin)])
async def hero_slots(request: Request) -> dict[str, object]:
    """Return all hero slots, including empty ones."""
    container: AppContainer = request.app.state.container
    return {"slots": container.hero.slots()}


@router.put("/hero/{slot}", dependencies=[Depends(require_admin)])
async def set_hero_slot(
    slot: int, payload: HeroSlotRequest, request: Request
) -> dict[str, object]:
    """Point a hero slot at an image."""
    container: AppContainer = request.app.state.container
    return {"slots": container.admin_service.set_hero_slot(slot, payload.image_url)}


@router.delete("/hero/{slot}", dependencies=[Depends(require_admin)])
async def clear_hero_slot(slot: int, request: Request) -> dict[str, object]:
    """Empty a hero slot."""
    container: AppContainer = request.app.state.container
    return {"slots": container.admin_service.clear_hero_slot(slot)}
