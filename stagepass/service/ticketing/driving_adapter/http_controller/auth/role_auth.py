from fastapi import Depends
from opentelemetry import trace

from stagepass.platform.exception.exceptions import ForbiddenError
from stagepass.service.ticketing.domain.value_object.identity import Identity
from stagepass.service.ticketing.driving_adapter.http_controller.user_controller import (
    get_current_user as get_user_from_controller,
)


class RoleAuthStrategy:
    @staticmethod
    def is_organizer(identity: Identity) -> bool:
        return identity.organizer


async def get_current_user(
    current_user: Identity = Depends(get_user_from_controller),
) -> Identity:
    return current_user


async def require_organizer(
    current_user: Identity = Depends(get_user_from_controller),
) -> Identity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_organizer',
        attributes={'user.id': current_user.id, 'user.organizer': current_user.organizer},
    ):
        if not RoleAuthStrategy.is_organizer(current_user):
            raise ForbiddenError('Only organizers can perform this action')
        return current_user
