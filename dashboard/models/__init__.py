### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Durable Store Models Package -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Durable Store Models Package

Contains SQLAlchemy models for the durable store:
- HotelRow: one hotel per tenant (branding + contact details)
- LinkRow: guest-portal links with an explicit order index

Note: these are storage rows. The in-session values the dashboard
works with live in dashboard.schemas.entities.
"""

from dashboard.models.hotel import HotelRow, new_row_id
from dashboard.models.link import LinkRow

__all__ = [
    "HotelRow",
    "LinkRow",
    "new_row_id",
]
