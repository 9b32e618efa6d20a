### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Dashboard Package -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
SmartStay Dashboard Package

Administration backend for the hotel guest portal:
- Branding/settings for one hotel per tenant
- Ordered link directory shown to guests
- Weather-conditioned activity recommendations

The core is the in-session EntityStore (optimistic updates with
rollback) and the link reordering engine.
"""

__version__ = "1.0.0"
