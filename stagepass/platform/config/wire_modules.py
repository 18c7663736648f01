"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from stagepass.service.ticketing.app.command import (
    cancel_reservation_use_case,
    create_venue_use_case,
    register_user_use_case,
    reserve_tickets_use_case,
)
from stagepass.service.ticketing.app.query import (
    get_concert_use_case,
    list_concerts_use_case,
    list_user_reservations_use_case,
    list_venues_use_case,
    login_use_case,
)
from stagepass.service.ticketing.driving_adapter.http_controller import user_controller


WIRE_MODULES: list[ModuleType] = [
    reserve_tickets_use_case,
    cancel_reservation_use_case,
    register_user_use_case,
    create_venue_use_case,
    login_use_case,
    get_concert_use_case,
    list_concerts_use_case,
    list_user_reservations_use_case,
    list_venues_use_case,
    user_controller,
]
