"""
Test fixtures and factories for SmartStay Dashboard tests.
"""

from tests.fixtures.data import SAMPLE_HOTEL_ROW, SAMPLE_LINK_ROWS
from tests.fixtures.factories import (
    create_hotel_row,
    create_link_row,
    make_access_token,
    make_activity,
    make_hotel,
    make_link,
    make_user,
)

__all__ = [
    "SAMPLE_HOTEL_ROW",
    "SAMPLE_LINK_ROWS",
    "create_hotel_row",
    "create_link_row",
    "make_access_token",
    "make_activity",
    "make_hotel",
    "make_link",
    "make_user",
]
