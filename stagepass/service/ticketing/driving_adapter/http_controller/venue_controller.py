from typing import List

from fastapi import APIRouter, Depends, status

from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.command.create_venue_use_case import CreateVenueUseCase
from stagepass.service.ticketing.app.query.list_venues_use_case import ListVenuesUseCase
from stagepass.service.ticketing.domain.value_object.identity import Identity
from stagepass.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    require_organizer,
)
from stagepass.service.ticketing.driving_adapter.http_controller.schema.venue_schema import (
    VenueCreateRequest,
    VenueResponse,
)


router = APIRouter()


@router.get('', response_model=List[VenueResponse])
@Logger.io
async def list_venues(
    use_case: ListVenuesUseCase = Depends(ListVenuesUseCase.depends),
) -> List[VenueResponse]:
    venues = await use_case.list_venues()
    return [
        VenueResponse(id=v.id or 0, name=v.name, address=v.address, created_at=v.created_at)
        for v in venues
    ]


@router.post('', response_model=VenueResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_venue(
    request: VenueCreateRequest,
    current_user: Identity = Depends(require_organizer),
    use_case: CreateVenueUseCase = Depends(CreateVenueUseCase.depends),
) -> VenueResponse:
    venue = await use_case.create(name=request.name, address=request.address)
    return VenueResponse(
        id=venue.id or 0, name=venue.name, address=venue.address, created_at=venue.created_at
    )
