from enum import StrEnum


class ReservationStatus(StrEnum):
    # Cancelling deletes the reservation, so there is no terminal state
    RESERVED = 'Reserved'
