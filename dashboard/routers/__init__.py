### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - API Routers Package -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
API Routers Package

Contains FastAPI routers for each dashboard page.
"""

from .account import router as account_router
from .activities import router as activities_router
from .hotel import router as hotel_router
from .links import router as links_router
from .overview import router as overview_router

__all__ = [
    "account_router",
    "activities_router",
    "hotel_router",
    "links_router",
    "overview_router",
]
