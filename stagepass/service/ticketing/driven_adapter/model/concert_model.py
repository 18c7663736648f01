from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from stagepass.platform.database.orm_db_setting import Base


class ConcertModel(Base):
    __tablename__ = 'concert'
    __table_args__ = (
        CheckConstraint('num_avail >= 0', name='ck_concert_num_avail_non_negative'),
        CheckConstraint('num_avail <= total_tickets', name='ck_concert_num_avail_within_total'),
        CheckConstraint('price >= 0', name='ck_concert_price_non_negative'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    artist: Mapped[str] = mapped_column(String(255), nullable=False)
    venue_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey('venue.id', ondelete='SET NULL'), nullable=True, index=True
    )
    tour: Mapped[str] = mapped_column(String(255), nullable=False)
    starts_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    genre: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    rules: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    organizer: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Ticket class
    ticket_type: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    num_avail: Mapped[int] = mapped_column(Integer, nullable=False)
    total_tickets: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self):
        return f'<ConcertModel(id={self.id}, artist={self.artist}, num_avail={self.num_avail})>'
