"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from stagepass.service.ticketing.driven_adapter.model.concert_model import ConcertModel
from stagepass.service.ticketing.driven_adapter.model.reservation_model import ReservationModel
from stagepass.service.ticketing.driven_adapter.model.user_model import UserModel
from stagepass.service.ticketing.driven_adapter.model.venue_model import VenueModel


__all__ = ['ConcertModel', 'ReservationModel', 'UserModel', 'VenueModel']
