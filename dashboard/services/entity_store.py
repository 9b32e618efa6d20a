### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - Entity Store -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Entity Store

In-session source of truth for one tenant: the Hotel, its Links, the
session's Activities and the signed-in User.

Every mutation is optimistic:
1. Snapshot the state it may need to restore
2. Apply the change in memory
3. Await the durable store call (hotel/link operations only)
4. On failure restore its own change and report a PersistenceError

Operations never raise. Each returns a MutationResult the caller can
inspect; failed results carry the pre-mutation snapshot as `rollback`.

Rollback policy per operation:
- add_link / delete_link / update_hotel: restored automatically
- update_link: not reverted (the caller may apply `rollback`)
- reorder_links: not reverted; rows persisted before the failure are
  listed on the error and `restore_links(rollback)` undoes the memory side
"""

import itertools
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, Iterable, Optional, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from dashboard.exceptions import (
    AuthRequiredError,
    DashboardError,
    FormValidationError,
    NotFoundError,
    PersistenceError,
    PreconditionError,
)
from dashboard.schemas.entities import (
    ACTIVITY_FIELDS,
    DEFAULT_HOTEL_NAME,
    HOTEL_FIELDS,
    LINK_CATEGORIES,
    LINK_FIELDS,
    PLACEHOLDER_PREFIX,
    USER_FIELDS,
    WEATHER_CONDITIONS,
    Activity,
    Hotel,
    Link,
    User,
    hotel_payload,
    is_placeholder_id,
    link_payload,
)
from dashboard.schemas.forms import collect_field_errors
from dashboard.services.reorder import changed_orders, reorder_collection
from dashboard.services.store_client import StoreClient

logger = logging.getLogger(__name__)

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)

# Hotel text columns the UI treats as "" when unset
_HOTEL_TEXT_FIELDS = ("address", "phone", "email", "description", "welcome_message")


@dataclass
class MutationResult(Generic[T]):
    """Outcome of an EntityStore operation"""

    ok: bool
    value: Optional[T] = None
    error: Optional[DashboardError] = None
    rollback: Any = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "MutationResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: DashboardError, rollback: Any = None) -> "MutationResult[T]":
        return cls(ok=False, error=error, rollback=rollback)

    def unwrap(self) -> Optional[T]:
        """Value of a successful result; raises the error otherwise"""
        if not self.ok:
            raise self.error
        return self.value


def _unknown_fields(fields: dict[str, Any], allowed: frozenset[str]) -> Optional[FormValidationError]:
    unknown = sorted(set(fields) - allowed)
    if not unknown:
        return None
    return FormValidationError(
        [{"field": name, "message": "Unknown or read-only field"} for name in unknown]
    )


def _merge(model: ModelT, fields: dict[str, Any]) -> ModelT:
    """Validated copy of model with fields applied"""
    return type(model).model_validate({**model.model_dump(), **fields})


def _invalid(e: ValidationError) -> FormValidationError:
    return FormValidationError(collect_field_errors(e.errors()))


class EntityStore:
    """
    Optimistic state holder for one editor session.

    Construct directly with already-resolved values, or use
    `await EntityStore.load(client, user)` to read them from the store.
    """

    def __init__(
        self,
        client: StoreClient,
        user: Optional[User] = None,
        hotel: Optional[Hotel] = None,
        links: Iterable[Link] = (),
        activities: Iterable[Activity] = (),
    ):
        self.client = client
        self.user = user
        self.hotel = hotel
        self.links: list[Link] = sorted(links, key=lambda link: link.order)
        self.activities: list[Activity] = list(activities)

        self._placeholder_ids = itertools.count(1)
        # Activity ids only need to be unique within the session
        self._activity_ids = itertools.count(int(time.time() * 1000))

    @classmethod
    async def load(cls, client: StoreClient, user: Optional[User]) -> "EntityStore":
        """
        Build a store from the tenant's durable Hotel and Links.

        Raises:
            AuthRequiredError: If no user is signed in
            PersistenceError: If the store cannot be read
        """
        if user is None:
            raise AuthRequiredError()

        try:
            row = await client.get_hotel_by_user(user.id)
            hotel = Hotel.from_row(row) if row else None
            links = []
            if hotel is not None:
                links = [Link.from_row(link_row) for link_row in await client.list_links(hotel.id)]
        except Exception as e:
            logger.exception(f"Failed to load dashboard for user {user.id}: {e}")
            raise PersistenceError("load", cause=e, message="Failed to load your dashboard") from e

        logger.info(f"Loaded dashboard for user {user.id}: hotel={'yes' if hotel else 'no'}, links={len(links)}")
        return cls(client, user=user, hotel=hotel, links=links)

    # ========================================
    # Internals
    # ========================================

    def _next_placeholder_id(self) -> str:
        return f"{PLACEHOLDER_PREFIX}{next(self._placeholder_ids)}"

    def _link_index(self, link_id: str) -> Optional[int]:
        for index, link in enumerate(self.links):
            if link.id == link_id:
                return index
        return None

    def _activity_index(self, activity_id: str) -> Optional[int]:
        for index, activity in enumerate(self.activities):
            if activity.id == activity_id:
                return index
        return None

    def _editable_link(self, link_id: str) -> tuple[Optional[int], Optional[DashboardError]]:
        """Locate a persisted link or explain why it cannot be changed"""
        if self.user is None:
            return None, AuthRequiredError()
        index = self._link_index(link_id)
        if index is None:
            return None, NotFoundError(f"Link {link_id} not found")
        if is_placeholder_id(link_id):
            return None, PreconditionError("Link is still being saved, try again in a moment")
        return index, None

    # ========================================
    # Hotel
    # ========================================

    async def update_hotel(self, fields: dict[str, Any]) -> MutationResult[Hotel]:
        """
        Merge branding fields into the hotel and upsert it by user.

        The first save inserts the hotel row (name defaults to "My Hotel");
        later saves update the same row id.
        """
        if self.user is None:
            return MutationResult.failure(AuthRequiredError())
        error = _unknown_fields(fields, HOTEL_FIELDS)
        if error:
            return MutationResult.failure(error)

        fields = {
            key: "" if value is None and key in _HOTEL_TEXT_FIELDS else value
            for key, value in fields.items()
        }
        snapshot = self.hotel
        now = datetime.utcnow()

        try:
            if snapshot is None:
                optimistic = Hotel(
                    **{
                        "name": DEFAULT_HOTEL_NAME,
                        **fields,
                        "id": self._next_placeholder_id(),
                        "created_at": now,
                        "updated_at": now,
                    }
                )
            else:
                optimistic = _merge(snapshot, {**fields, "updated_at": now})
        except ValidationError as e:
            return MutationResult.failure(_invalid(e))

        self.hotel = optimistic

        try:
            existing = await self.client.get_hotel_by_user(self.user.id)
            payload = hotel_payload(fields, updated_at=now)
            if existing is None:
                if not payload.get("name"):
                    payload["name"] = DEFAULT_HOTEL_NAME
                row = await self.client.insert_hotel(self.user.id, payload)
                logger.info(f"Created hotel {row['id']} for user {self.user.id}")
            else:
                row = await self.client.update_hotel(existing["id"], payload)
                logger.debug(f"Updated hotel {row['id']}")
        except Exception as e:
            logger.exception(f"Failed to save hotel for user {self.user.id}: {e}")
            # A newer update may have replaced the optimistic value meanwhile
            if self.hotel is optimistic:
                self.hotel = snapshot
            return MutationResult.failure(PersistenceError("update_hotel", cause=e), rollback=snapshot)

        current = self.hotel if self.hotel is not None else optimistic
        self.hotel = current.model_copy(update={"id": row["id"], "created_at": row["created_at"]})
        return MutationResult.success(self.hotel)

    # ========================================
    # Links
    # ========================================

    async def add_link(self, fields: dict[str, Any]) -> MutationResult[Link]:
        """
        Append a link at the end of the directory and insert it.

        The link carries a placeholder id until the insert returns; on
        failure only that entry is removed. If a reorder moved the link
        while its insert was pending, the new order is written after the
        insert (that reorder skips placeholders).
        """
        if self.user is None:
            return MutationResult.failure(AuthRequiredError())
        if self.hotel is None or is_placeholder_id(self.hotel.id):
            return MutationResult.failure(
                PreconditionError("Please create your hotel first in Branding settings")
            )
        error = _unknown_fields(fields, LINK_FIELDS)
        if error:
            return MutationResult.failure(error)

        hotel_id = self.hotel.id
        order = max((link.order for link in self.links), default=0) + 1
        placeholder_id = self._next_placeholder_id()
        try:
            optimistic = Link(
                **fields,
                id=placeholder_id,
                hotel_id=hotel_id,
                order=order,
                created_at=datetime.utcnow(),
            )
        except ValidationError as e:
            return MutationResult.failure(_invalid(e))

        snapshot = list(self.links)
        self.links.append(optimistic)

        try:
            row = await self.client.insert_link(hotel_id, link_payload({**fields, "order": order}))
        except Exception as e:
            logger.exception(f"Failed to add link '{optimistic.title}': {e}")
            index = self._link_index(placeholder_id)
            if index is not None:
                del self.links[index]
            return MutationResult.failure(PersistenceError("add_link", cause=e), rollback=snapshot)

        index = self._link_index(placeholder_id)
        if index is None:
            return MutationResult.success(Link.from_row(row))

        confirmed = self.links[index].model_copy(
            update={"id": row["id"], "created_at": row["created_at"]}
        )
        self.links[index] = confirmed

        # A reorder while the insert was pending moved the link but could not persist it
        if confirmed.order != order:
            try:
                await self.client.update_link(confirmed.id, link_payload({"order": confirmed.order}))
            except Exception as e:
                logger.exception(f"Link {confirmed.id} was added but its new order could not be saved: {e}")
                return MutationResult.failure(
                    PersistenceError(
                        "add_link",
                        cause=e,
                        message="Link added, but its new position could not be saved",
                        persisted_ids=[confirmed.id],
                    ),
                    rollback=snapshot,
                )
            current = self._link_index(confirmed.id)
            if current is not None:
                confirmed = self.links[current]

        logger.debug(f"Added link {confirmed.id} at order {confirmed.order}")
        return MutationResult.success(confirmed)

    async def update_link(self, link_id: str, fields: dict[str, Any]) -> MutationResult[Link]:
        """
        Merge fields into a link and persist only those fields.

        A failed save keeps the in-memory edit; the result's rollback
        holds the collection as it was before the call.
        """
        index, error = self._editable_link(link_id)
        if error:
            return MutationResult.failure(error)
        error = _unknown_fields(fields, LINK_FIELDS)
        if error:
            return MutationResult.failure(error)

        snapshot = list(self.links)
        try:
            updated = _merge(self.links[index], fields)
        except ValidationError as e:
            return MutationResult.failure(_invalid(e))

        self.links[index] = updated

        try:
            await self.client.update_link(link_id, link_payload(fields))
        except Exception as e:
            logger.exception(f"Failed to update link {link_id}: {e}")
            return MutationResult.failure(PersistenceError("update_link", cause=e), rollback=snapshot)

        current = self._link_index(link_id)
        return MutationResult.success(self.links[current] if current is not None else updated)

    async def delete_link(self, link_id: str) -> MutationResult[Link]:
        """Remove a link, restoring it at its old position if the delete fails"""
        index, error = self._editable_link(link_id)
        if error:
            return MutationResult.failure(error)

        snapshot = list(self.links)
        removed = self.links.pop(index)

        try:
            await self.client.delete_link(link_id)
        except Exception as e:
            logger.exception(f"Failed to delete link {link_id}: {e}")
            # Only undo this delete; overlapping mutations keep their own changes
            if self._link_index(link_id) is None:
                self.links.insert(min(index, len(self.links)), removed)
            return MutationResult.failure(PersistenceError("delete_link", cause=e), rollback=snapshot)

        logger.debug(f"Deleted link {link_id}")
        return MutationResult.success(removed)

    async def reorder_links(
        self,
        sequence: Sequence[Link],
        category: Optional[str] = None,
    ) -> MutationResult[list[Link]]:
        """
        Apply a dragged sequence and persist the changed order values.

        Args:
            sequence: Links of the targeted view in their new order
            category: Tab the drag happened in (None = all links)

        Rows are written one at a time in display order. A failure part
        way through leaves memory reordered; the error lists the rows
        already written and rollback holds the previous collection.
        """
        if self.user is None:
            return MutationResult.failure(AuthRequiredError())

        current = {link.id: link for link in self.links}
        resolved = [current.get(link.id, link) for link in sequence]
        snapshot = list(self.links)

        try:
            reordered = reorder_collection(snapshot, resolved, category)
        except ValueError as e:
            return MutationResult.failure(FormValidationError([{"field": "ids", "message": str(e)}]))

        self.links = reordered
        changes = changed_orders(snapshot, reordered)

        persisted: list[str] = []
        for link in reordered:
            if link.id not in changes or is_placeholder_id(link.id):
                continue
            try:
                await self.client.update_link(link.id, link_payload({"order": link.order}))
            except Exception as e:
                logger.exception(
                    f"Reorder failed at link {link.id} after {len(persisted)} of {len(changes)} rows: {e}"
                )
                return MutationResult.failure(
                    PersistenceError("reorder_links", cause=e, persisted_ids=persisted),
                    rollback=snapshot,
                )
            persisted.append(link.id)

        logger.debug(f"Reordered links ({len(persisted)} rows updated)")
        return MutationResult.success(list(self.links))

    def restore_links(self, snapshot: Sequence[Link]) -> MutationResult[list[Link]]:
        """Replace the in-memory links with a rollback snapshot (memory only)"""
        self.links = sorted(snapshot, key=lambda link: link.order)
        return MutationResult.success(list(self.links))

    # ========================================
    # Activities (session-local)
    # ========================================

    def add_activity(self, fields: dict[str, Any]) -> MutationResult[Activity]:
        error = _unknown_fields(fields, ACTIVITY_FIELDS)
        if error:
            return MutationResult.failure(error)
        try:
            activity = Activity(
                **fields,
                id=str(next(self._activity_ids)),
                created_at=datetime.utcnow(),
            )
        except ValidationError as e:
            return MutationResult.failure(_invalid(e))
        self.activities.append(activity)
        return MutationResult.success(activity)

    def update_activity(self, activity_id: str, fields: dict[str, Any]) -> MutationResult[Activity]:
        index = self._activity_index(activity_id)
        if index is None:
            return MutationResult.failure(NotFoundError(f"Activity {activity_id} not found"))
        error = _unknown_fields(fields, ACTIVITY_FIELDS)
        if error:
            return MutationResult.failure(error)
        try:
            updated = _merge(self.activities[index], fields)
        except ValidationError as e:
            return MutationResult.failure(_invalid(e))
        self.activities[index] = updated
        return MutationResult.success(updated)

    def delete_activity(self, activity_id: str) -> MutationResult[Activity]:
        index = self._activity_index(activity_id)
        if index is None:
            return MutationResult.failure(NotFoundError(f"Activity {activity_id} not found"))
        return MutationResult.success(self.activities.pop(index))

    # ========================================
    # User (session-local)
    # ========================================

    def update_user(self, fields: dict[str, Any]) -> MutationResult[User]:
        """Profile edit (name, email, avatar); passwords belong to the auth provider"""
        if self.user is None:
            return MutationResult.failure(AuthRequiredError())
        error = _unknown_fields(fields, USER_FIELDS)
        if error:
            return MutationResult.failure(error)
        try:
            self.user = _merge(self.user, fields)
        except ValidationError as e:
            return MutationResult.failure(_invalid(e))
        return MutationResult.success(self.user)

    # ========================================
    # Read helpers
    # ========================================

    def get_link(self, link_id: str) -> Optional[Link]:
        index = self._link_index(link_id)
        return self.links[index] if index is not None else None

    def links_in(self, category: Optional[str] = None) -> list[Link]:
        """Links of one category tab (all links if None), sorted by order"""
        links = [link for link in self.links if category is None or link.category == category]
        return sorted(links, key=lambda link: link.order)

    def category_counts(self) -> dict[str, int]:
        counts = dict.fromkeys(LINK_CATEGORIES, 0)
        for link in self.links:
            counts[link.category] += 1
        return counts

    def activities_for(self, weather: str) -> list[Activity]:
        """
        Active activities recommended for a weather condition.

        Sorted by priority (1 first); equal priorities keep insertion order.
        """
        matching = [
            activity
            for activity in self.activities
            if activity.is_active and activity.weather_condition == weather
        ]
        return sorted(matching, key=lambda activity: activity.priority)

    def weather_counts(self) -> dict[str, int]:
        counts = dict.fromkeys(WEATHER_CONDITIONS, 0)
        for activity in self.activities:
            counts[activity.weather_condition] += 1
        return counts

    def stats(self) -> dict[str, int]:
        return {
            "total_links": len(self.links),
            "active_links": sum(1 for link in self.links if link.is_active),
            "total_activities": len(self.activities),
        }

    def portal_preview(self, limit: int = 3) -> list[Link]:
        """First active links, as the guest portal shows them"""
        return [link for link in self.links_in() if link.is_active][:limit]
