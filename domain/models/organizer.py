"""
Organizer model - privileged accounts holding an opaque bearer token.
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from domain.models.database import Base


class Organizer(Base):
    __tablename__ = "organizers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, nullable=False, unique=True)
    password_hash = Column(String, nullable=False)
    token = Column(String, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self):
        return f"<Organizer(id={self.id}, username='{self.username}')>"
