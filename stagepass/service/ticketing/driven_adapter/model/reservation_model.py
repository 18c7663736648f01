from datetime import datetime
import uuid

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from stagepass.platform.database.orm_db_setting import Base


class ReservationModel(Base):
    __tablename__ = 'reservation'
    __table_args__ = (CheckConstraint('num_tickets > 0', name='ck_reservation_num_tickets_positive'),)

    # UUID7, shown to users as the reservation number
    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('user.id', ondelete='CASCADE'), nullable=False, index=True
    )
    concert_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('concert.id', ondelete='CASCADE'), nullable=False, index=True
    )
    num_tickets: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='Reserved')
    reserved_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self):
        return (
            f'<ReservationModel(id={self.id}, user_id={self.user_id}, '
            f'concert_id={self.concert_id}, num_tickets={self.num_tickets})>'
        )
