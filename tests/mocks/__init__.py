"""
Mock implementations for testing.

Provides mocks for external dependencies:
- StoreClient: durable hotels/links store
"""

from tests.mocks.mock_store_client import create_mock_store_client, durable_calls

__all__ = [
    "create_mock_store_client",
    "durable_calls",
]
