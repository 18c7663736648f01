from typing import List

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from stagepass.platform.logging.loguru_io import Logger
from stagepass.platform.types.uuid7_utils_types import UtilsUUID7
from stagepass.service.ticketing.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from stagepass.service.ticketing.app.command.reserve_tickets_use_case import (
    ReserveTicketsUseCase,
)
from stagepass.service.ticketing.app.query.list_user_reservations_use_case import (
    ListUserReservationsUseCase,
)
from stagepass.service.ticketing.domain.value_object.identity import Identity
from stagepass.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
)
from stagepass.service.ticketing.driving_adapter.http_controller.schema.reservation_schema import (
    CancelReservationResponse,
    ReservationDetailResponse,
    ReservationResponse,
    ReserveTicketsRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post(
    '/reserveTickets', response_model=ReservationResponse, status_code=status.HTTP_201_CREATED
)
@Logger.io
async def reserve_tickets(
    request: ReserveTicketsRequest,
    current_user: Identity = Depends(get_current_user),
    use_case: ReserveTicketsUseCase = Depends(ReserveTicketsUseCase.depends),
) -> ReservationResponse:
    with tracer.start_as_current_span('controller.reserve_tickets') as span:
        span.set_attribute('user.id', current_user.id)
        reservation = await use_case.reserve(
            concert_id=request.concert_id,
            quantity=request.num_tickets,
            identity=current_user,
        )
        span.set_attribute('reservation.id', str(reservation.id))
        return ReservationResponse.from_entity(reservation)


@router.delete('/reserveTickets/{reservation_id}', response_model=CancelReservationResponse)
@Logger.io
async def cancel_reservation(
    reservation_id: UtilsUUID7,
    current_user: Identity = Depends(get_current_user),
    use_case: CancelReservationUseCase = Depends(CancelReservationUseCase.depends),
) -> CancelReservationResponse:
    reservation = await use_case.cancel(reservation_id=reservation_id, identity=current_user)
    return CancelReservationResponse(
        reservation_number=reservation.id,
        tickets_released=reservation.num_tickets,
    )


@router.get('/user/tickets', response_model=List[ReservationDetailResponse])
@Logger.io
async def list_my_tickets(
    current_user: Identity = Depends(get_current_user),
    use_case: ListUserReservationsUseCase = Depends(ListUserReservationsUseCase.depends),
) -> List[ReservationDetailResponse]:
    details = await use_case.list_for_user(identity=current_user)
    return [ReservationDetailResponse.from_detail(detail) for detail in details]
