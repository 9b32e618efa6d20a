### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Durable Store Client -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Durable Store Client

Row-oriented access to the two durable collections:
- hotels: one row per tenant, upserted by user_id
- links: many rows per hotel, read back ordered by order_index

Rows cross this boundary as plain dicts keyed by column name. Methods
are async so the EntityStore treats every call as an I/O suspension
point; the SQLAlchemy implementation runs synchronous sessions inside.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dashboard.database import SessionLocal
from dashboard.models import HotelRow, LinkRow

logger = logging.getLogger(__name__)

HOTEL_COLUMNS = (
    "id",
    "user_id",
    "name",
    "primary_color",
    "logo",
    "address",
    "phone",
    "email",
    "description",
    "welcome_message",
    "created_at",
    "updated_at",
)

LINK_COLUMNS = (
    "id",
    "hotel_id",
    "title",
    "url",
    "description",
    "icon",
    "category",
    "order_index",
    "is_active",
    "created_at",
)

# Columns callers may write (ids and ownership are assigned here)
_HOTEL_WRITABLE = frozenset(HOTEL_COLUMNS) - {"id", "user_id", "created_at"}
_LINK_WRITABLE = frozenset(LINK_COLUMNS) - {"id", "hotel_id", "created_at"}


class StoreClientError(Exception):
    """Durable store call failed"""


class StoreClient(Protocol):
    """Interface the EntityStore consumes"""

    async def get_hotel_by_user(self, user_id: str) -> dict[str, Any] | None: ...

    async def insert_hotel(self, user_id: str, fields: dict[str, Any]) -> dict[str, Any]: ...

    async def update_hotel(self, hotel_id: str, fields: dict[str, Any]) -> dict[str, Any]: ...

    async def list_links(self, hotel_id: str, active_only: bool = False) -> list[dict[str, Any]]: ...

    async def insert_link(self, hotel_id: str, fields: dict[str, Any]) -> dict[str, Any]: ...

    async def update_link(self, link_id: str, fields: dict[str, Any]) -> None: ...

    async def delete_link(self, link_id: str) -> None: ...


def _to_dict(row: Any, columns: tuple[str, ...]) -> dict[str, Any]:
    return {column: getattr(row, column) for column in columns}


def _writable(fields: dict[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    unknown = set(fields) - allowed
    if unknown:
        raise StoreClientError(f"Unknown or read-only columns: {', '.join(sorted(unknown))}")
    return fields


class SQLAlchemyStoreClient:
    """
    StoreClient backed by the app database.

    Each call opens its own session and commits (or rolls back) before
    returning, so a failed call never leaves partial writes behind.
    """

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        """
        Initialize the client.

        Args:
            session_factory: Callable returning a new Session (default: SessionLocal)
        """
        self.session_factory = session_factory

    def _run(self, operation: str, work: Callable[[Session], Any]) -> Any:
        """Run work in a fresh session, committing on success"""
        db = self.session_factory()
        try:
            result = work(db)
            db.commit()
            return result
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Store call '{operation}' failed: {e!s}")
            raise StoreClientError(f"{operation} failed: {e!s}") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # ========================================
    # Hotels
    # ========================================

    async def get_hotel_by_user(self, user_id: str) -> dict[str, Any] | None:
        """Get the tenant's hotel row, or None if it has not been created"""

        def work(db: Session):
            row = db.query(HotelRow).filter(HotelRow.user_id == user_id).first()
            return _to_dict(row, HOTEL_COLUMNS) if row else None

        return self._run("get_hotel_by_user", work)

    async def insert_hotel(self, user_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Insert the tenant's hotel row and return it with its assigned id"""
        fields = _writable(fields, _HOTEL_WRITABLE)

        def work(db: Session):
            row = HotelRow(user_id=user_id, **fields)
            db.add(row)
            db.flush()
            db.refresh(row)
            return _to_dict(row, HOTEL_COLUMNS)

        return self._run("insert_hotel", work)

    async def update_hotel(self, hotel_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Update the given columns of a hotel row and return the row"""
        fields = _writable(fields, _HOTEL_WRITABLE)

        def work(db: Session):
            row = db.query(HotelRow).filter(HotelRow.id == hotel_id).first()
            if row is None:
                raise StoreClientError(f"Hotel {hotel_id} not found")
            for column, value in fields.items():
                setattr(row, column, value)
            db.flush()
            db.refresh(row)
            return _to_dict(row, HOTEL_COLUMNS)

        return self._run("update_hotel", work)

    # ========================================
    # Links
    # ========================================

    async def list_links(self, hotel_id: str, active_only: bool = False) -> list[dict[str, Any]]:
        """
        Get a hotel's links ordered by order_index.

        active_only=True is the guest portal's view of the directory.
        """

        def work(db: Session):
            query = db.query(LinkRow).filter(LinkRow.hotel_id == hotel_id)
            if active_only:
                query = query.filter(LinkRow.is_active)
            rows = query.order_by(LinkRow.order_index, LinkRow.created_at).all()
            return [_to_dict(row, LINK_COLUMNS) for row in rows]

        return self._run("list_links", work)

    async def insert_link(self, hotel_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Insert a link for a hotel and return it with its assigned id"""
        fields = _writable(fields, _LINK_WRITABLE)

        def work(db: Session):
            row = LinkRow(hotel_id=hotel_id, created_at=datetime.utcnow(), **fields)
            db.add(row)
            db.flush()
            db.refresh(row)
            return _to_dict(row, LINK_COLUMNS)

        return self._run("insert_link", work)

    async def update_link(self, link_id: str, fields: dict[str, Any]) -> None:
        """Update only the given columns of a link"""
        fields = _writable(fields, _LINK_WRITABLE)
        if not fields:
            return

        def work(db: Session):
            updated = (
                db.query(LinkRow)
                .filter(LinkRow.id == link_id)
                .update(fields, synchronize_session=False)
            )
            if updated == 0:
                raise StoreClientError(f"Link {link_id} not found")

        self._run("update_link", work)

    async def delete_link(self, link_id: str) -> None:
        """Delete a link by id"""

        def work(db: Session):
            deleted = db.query(LinkRow).filter(LinkRow.id == link_id).delete(synchronize_session=False)
            if deleted == 0:
                raise StoreClientError(f"Link {link_id} not found")

        self._run("delete_link", work)
