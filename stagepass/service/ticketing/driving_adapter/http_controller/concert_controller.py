from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.command.create_concert_use_case import CreateConcertUseCase
from stagepass.service.ticketing.app.command.delete_concert_use_case import DeleteConcertUseCase
from stagepass.service.ticketing.app.command.update_concert_use_case import UpdateConcertUseCase
from stagepass.service.ticketing.app.query.get_concert_use_case import GetConcertUseCase
from stagepass.service.ticketing.app.query.list_concerts_use_case import ListConcertsUseCase
from stagepass.service.ticketing.domain.value_object.identity import Identity
from stagepass.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_organizer,
)
from stagepass.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    MAX_INT32,
    RecordIdPath,
)
from stagepass.service.ticketing.driving_adapter.http_controller.schema.concert_schema import (
    ConcertCreatedResponse,
    ConcertCreateRequest,
    ConcertDeletedResponse,
    ConcertResponse,
    ConcertUpdateRequest,
)


router = APIRouter()


@router.get('/AllConcerts', response_model=List[ConcertResponse])
@Logger.io
async def list_all_concerts(
    genre: Optional[str] = None,
    venue_id: Optional[int] = Query(None, alias='venueId', gt=0, le=MAX_INT32),
    use_case: ListConcertsUseCase = Depends(ListConcertsUseCase.depends),
) -> List[ConcertResponse]:
    concerts = await use_case.list_concerts(genre=genre, venue_id=venue_id)
    return [ConcertResponse.from_read_model(item) for item in concerts]


@router.get('/ConcertsByVenue/{venue_id}', response_model=List[ConcertResponse])
@Logger.io
async def list_concerts_by_venue(
    venue_id: RecordIdPath,
    use_case: ListConcertsUseCase = Depends(ListConcertsUseCase.depends),
) -> List[ConcertResponse]:
    concerts = await use_case.list_by_venue(venue_id=venue_id)
    return [ConcertResponse.from_read_model(item) for item in concerts]


@router.get('/genres', response_model=List[str])
@Logger.io
async def list_genres(
    use_case: ListConcertsUseCase = Depends(ListConcertsUseCase.depends),
) -> List[str]:
    return await use_case.list_genres()


# Any authenticated caller reaches the use case, which answers 403 for non-organizers
@router.get('/YourConcerts', response_model=List[ConcertResponse])
@Logger.io
async def list_your_concerts(
    current_user: Identity = Depends(get_current_user),
    use_case: ListConcertsUseCase = Depends(ListConcertsUseCase.depends),
) -> List[ConcertResponse]:
    concerts = await use_case.list_for_organizer(identity=current_user)
    return [ConcertResponse.from_read_model(item) for item in concerts]


@router.get('/ConcertDetails/{concert_id}', response_model=ConcertResponse)
@Logger.io
async def get_concert(
    concert_id: RecordIdPath,
    use_case: GetConcertUseCase = Depends(GetConcertUseCase.depends),
) -> ConcertResponse:
    return ConcertResponse.from_read_model(await use_case.get(concert_id=concert_id))


@router.post(
    '/NewConcert', response_model=ConcertCreatedResponse, status_code=status.HTTP_201_CREATED
)
@Logger.io
async def create_concert(
    request: ConcertCreateRequest,
    current_user: Identity = Depends(require_organizer),
    use_case: CreateConcertUseCase = Depends(CreateConcertUseCase.depends),
) -> ConcertCreatedResponse:
    created = await use_case.create(
        identity=current_user,
        artist=request.artist,
        venue_id=request.venue_id,
        tour=request.tour,
        starts_at=request.starts_at,
        description=request.description,
        genre=request.genre,
        ticket_type=request.tickets.type,
        price=request.tickets.price,
        num_avail=request.tickets.num_avail,
        rules=request.rules,
        image_url=request.image_url,
    )
    return ConcertCreatedResponse(concert=ConcertResponse.from_read_model(created))


@router.put('/ConcertDetails/{concert_id}', response_model=ConcertResponse)
@Logger.io
async def update_concert(
    concert_id: RecordIdPath,
    request: ConcertUpdateRequest,
    current_user: Identity = Depends(require_organizer),
    use_case: UpdateConcertUseCase = Depends(UpdateConcertUseCase.depends),
) -> ConcertResponse:
    updated = await use_case.update(
        concert_id=concert_id,
        identity=current_user,
        values=request.to_field_values(),
        total_tickets=request.tickets.total_tickets if request.tickets else None,
    )
    return ConcertResponse.from_read_model(updated)


@router.delete('/ConcertDetails/{concert_id}', response_model=ConcertDeletedResponse)
@Logger.io
async def delete_concert(
    concert_id: RecordIdPath,
    current_user: Identity = Depends(require_organizer),
    use_case: DeleteConcertUseCase = Depends(DeleteConcertUseCase.depends),
) -> ConcertDeletedResponse:
    removed = await use_case.delete(concert_id=concert_id, identity=current_user)
    return ConcertDeletedResponse(concert_id=concert_id, reservations_removed=removed)
