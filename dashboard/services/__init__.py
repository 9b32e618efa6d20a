### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Services Package -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Services Package

- store_client: durable hotels/links store access
- entity_store: optimistic in-session state for one tenant
- reorder: link ordering engine
- auth: provider access token verification
"""

from .auth import TokenAuthClient
from .entity_store import EntityStore, MutationResult
from .store_client import SQLAlchemyStoreClient, StoreClient, StoreClientError

__all__ = [
    "EntityStore",
    "MutationResult",
    "SQLAlchemyStoreClient",
    "StoreClient",
    "StoreClientError",
    "TokenAuthClient",
]
