### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Link Model -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Link Model

Guest-portal link owned by a hotel. order_index defines the display
sequence; the guest portal reads active rows ordered by it.
"""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from dashboard.database import Base
from dashboard.models.hotel import new_row_id


class LinkRow(Base):
    """
    Link model - one entry of a hotel's link directory.

    url holds a destination URI or, by product convention, literal
    content such as a WiFi password.
    """

    __tablename__ = "links"

    id = Column(String(36), primary_key=True, default=new_row_id)
    hotel_id = Column(String(36), ForeignKey("hotels.id"), nullable=False)
    title = Column(String(100), nullable=False)
    url = Column(Text, nullable=False)
    description = Column(String(200), nullable=True)
    icon = Column(String(50), nullable=True)
    category = Column(String(20), nullable=False)  # hotel | activities | contact
    order_index = Column(Integer, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    hotel = relationship("HotelRow", back_populates="links")

    __table_args__ = (Index("ix_links_hotel_order", "hotel_id", "order_index"),)

    def __repr__(self):
        return f"<LinkRow(id={self.id}, title='{self.title}', order={self.order_index})>"
