from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from stagepass.platform.database.orm_db_setting import Base


class VenueModel(Base):
    __tablename__ = 'venue'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Venue names are not unique: two cities can each have an "Arena"
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self):
        return f'<VenueModel(id={self.id}, name={self.name})>'
