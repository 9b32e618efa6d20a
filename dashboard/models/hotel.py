### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Hotel Model -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Hotel Model

One row per tenant. The tenant is the authenticated user that owns
the hotel; user_id is unique so the dashboard can upsert by it.
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import relationship

from dashboard.database import Base


def new_row_id() -> str:
    """Durable identity for hotels and links (UUID4 string)"""
    return str(uuid.uuid4())


class HotelRow(Base):
    """
    Hotel model - branding and contact details shown on the guest portal.

    Created on the first branding/settings save, updated on every
    save after that, never deleted by the dashboard.
    """

    __tablename__ = "hotels"

    id = Column(String(36), primary_key=True, default=new_row_id)
    user_id = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)
    primary_color = Column(String(7), nullable=False, default="#3B82F6")
    logo = Column(String(2048), nullable=True)
    address = Column(Text, nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    welcome_message = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    links = relationship("LinkRow", back_populates="hotel", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<HotelRow(id={self.id}, name='{self.name}')>"
