"""
Unit tests for the EntityStore.

Tests optimistic updates, identity swap, rollback on durable failures,
the hotel precondition, hotel upsert, reordering and session-local
activities/user edits. The durable store is a mock StoreClient.
"""

import asyncio

import pytest

from dashboard.exceptions import (
    AuthRequiredError,
    FormValidationError,
    NotFoundError,
    PersistenceError,
    PreconditionError,
)
from dashboard.schemas.entities import is_placeholder_id
from dashboard.services.entity_store import EntityStore, MutationResult
from dashboard.services.store_client import StoreClientError

from tests.fixtures.data import SAMPLE_HOTEL_ROW, SAMPLE_LINK_ROWS, TEST_HOTEL_ID, VALID_LINK_SUBMISSION
from tests.fixtures.factories import make_activity, make_hotel, make_link, make_user
from tests.mocks.mock_store_client import create_mock_store_client, durable_calls

LINK_IDS = [row["id"] for row in SAMPLE_LINK_ROWS]


def _ids(links):
    return [link.id for link in links]


def _dense(links):
    return sorted(link.order for link in links) == list(range(1, len(links) + 1))


@pytest.fixture
def seeded_store(seeded_store_client, test_user):
    """Store over the sample hotel and links (loaded synchronously)"""
    return asyncio.run(EntityStore.load(seeded_store_client, test_user))


@pytest.fixture
def abc_store():
    """Store holding A(hotel,1) B(activities,2) C(hotel,3) with a mock client that knows them"""
    links = [make_link("A", 1, "hotel"), make_link("B", 2, "activities"), make_link("C", 3, "hotel")]
    client = create_mock_store_client(
        hotel={**SAMPLE_HOTEL_ROW},
        links=[
            {**link.model_dump(exclude={"order"}), "order_index": link.order}
            for link in links
        ],
    )
    return EntityStore(client, user=make_user(), hotel=make_hotel(), links=links)


class TestMutationResult:
    """Test the result container."""

    def test_success(self):
        result = MutationResult.success("value")

        assert result.ok is True
        assert result.unwrap() == "value"
        assert result.error is None

    def test_failure_unwrap_raises(self):
        error = PreconditionError("Create your hotel first")
        result = MutationResult.failure(error, rollback=[1, 2])

        assert result.ok is False
        assert result.rollback == [1, 2]
        with pytest.raises(PreconditionError):
            result.unwrap()


class TestLoad:
    """Test building a store from durable rows."""

    @pytest.mark.asyncio
    async def test_load_existing_tenant(self, seeded_store_client, test_user):
        store = await EntityStore.load(seeded_store_client, test_user)

        assert store.hotel.id == TEST_HOTEL_ID
        assert store.hotel.name == "Hotel Patagonia Lodge"
        assert _ids(store.links) == LINK_IDS
        assert [link.order for link in store.links] == [1, 2, 3]
        assert store.activities == []
        seeded_store_client.list_links.assert_awaited_once_with(TEST_HOTEL_ID)

    @pytest.mark.asyncio
    async def test_load_new_tenant(self, mock_store_client, test_user):
        """A tenant without a hotel starts empty and never lists links."""
        store = await EntityStore.load(mock_store_client, test_user)

        assert store.hotel is None
        assert store.links == []
        mock_store_client.list_links.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_load_requires_user(self, mock_store_client):
        with pytest.raises(AuthRequiredError):
            await EntityStore.load(mock_store_client, None)

        assert durable_calls(mock_store_client) == 0

    @pytest.mark.asyncio
    async def test_load_store_failure(self, test_user):
        client = create_mock_store_client(errors={"get_hotel_by_user": StoreClientError("connection refused")})

        with pytest.raises(PersistenceError) as exc_info:
            await EntityStore.load(client, test_user)

        assert exc_info.value.operation == "load"


class TestAddLink:
    """Test optimistic link creation."""

    @pytest.mark.asyncio
    async def test_add_appends_with_next_order(self, seeded_store, seeded_store_client):
        result = await seeded_store.add_link(VALID_LINK_SUBMISSION)

        assert result.ok
        assert result.value.order == 4
        assert result.value.title == "Front Desk WhatsApp"
        assert _dense(seeded_store.links)

    @pytest.mark.asyncio
    async def test_add_swaps_in_durable_id(self, seeded_store, seeded_store_client):
        """The placeholder id is replaced in place by the inserted row's id."""
        result = await seeded_store.add_link(VALID_LINK_SUBMISSION)

        durable_id = seeded_store_client.rows["links"][result.value.id]["id"]
        assert seeded_store.links[-1].id == durable_id
        assert not any(is_placeholder_id(link.id) for link in seeded_store.links)

    @pytest.mark.asyncio
    async def test_placeholder_never_sent(self, seeded_store, seeded_store_client):
        await seeded_store.add_link(VALID_LINK_SUBMISSION)

        hotel_id, payload = seeded_store_client.insert_link.await_args.args
        assert hotel_id == TEST_HOTEL_ID
        assert "id" not in payload
        assert payload["order_index"] == 4
        assert "order" not in payload

    @pytest.mark.asyncio
    async def test_add_into_empty_directory(self, test_user):
        client = create_mock_store_client(hotel=SAMPLE_HOTEL_ROW)
        store = EntityStore(client, user=test_user, hotel=make_hotel())

        result = await store.add_link(VALID_LINK_SUBMISSION)

        assert result.value.order == 1

    @pytest.mark.asyncio
    async def test_add_failure_rolls_back(self, test_user):
        """A failed insert leaves exactly the original links."""
        client = create_mock_store_client(
            hotel=SAMPLE_HOTEL_ROW,
            links=SAMPLE_LINK_ROWS,
            errors={"insert_link": StoreClientError("constraint violation")},
        )
        store = await EntityStore.load(client, test_user)

        result = await store.add_link(VALID_LINK_SUBMISSION)

        assert result.ok is False
        assert isinstance(result.error, PersistenceError)
        assert result.error.message == "Failed to save changes"
        assert len(store.links) == 3
        assert _ids(store.links) == LINK_IDS
        assert _ids(result.rollback) == LINK_IDS

    @pytest.mark.asyncio
    async def test_overlapping_adds_roll_back_independently(self, seeded_store, seeded_store_client):
        """A failed add removes only its own link, not one added meanwhile."""
        first_started = asyncio.Event()
        release_first = asyncio.Event()
        insert_link = seeded_store_client.insert_link.side_effect

        async def insert(hotel_id, fields):
            if fields["title"] == "Gym Hours":
                first_started.set()
                await release_first.wait()
                raise StoreClientError("network error")
            return await insert_link(hotel_id, fields)

        seeded_store_client.insert_link.side_effect = insert

        failing = asyncio.create_task(
            seeded_store.add_link({**VALID_LINK_SUBMISSION, "title": "Gym Hours"})
        )
        await first_started.wait()
        added = await seeded_store.add_link(VALID_LINK_SUBMISSION)
        release_first.set()
        failed = await failing

        assert added.ok is True
        assert failed.ok is False
        assert isinstance(failed.error, PersistenceError)
        assert _ids(seeded_store.links) == LINK_IDS + [added.value.id]
        assert not any(is_placeholder_id(link.id) for link in seeded_store.links)
        assert seeded_store.links[-1].title == "Front Desk WhatsApp"

    @pytest.mark.asyncio
    async def test_add_without_hotel_is_precondition_error(self, mock_store_client, test_user):
        """No hotel yet: PreconditionError and zero durable calls."""
        store = EntityStore(mock_store_client, user=test_user)

        result = await store.add_link(VALID_LINK_SUBMISSION)

        assert isinstance(result.error, PreconditionError)
        assert "create your hotel first" in result.error.message.lower()
        assert store.links == []
        assert durable_calls(mock_store_client) == 0

    @pytest.mark.asyncio
    async def test_add_while_hotel_insert_in_flight(self, mock_store_client, test_user):
        """A hotel still holding a placeholder id cannot own links yet."""
        store = EntityStore(mock_store_client, user=test_user, hotel=make_hotel(hotel_id="temp-1"))

        result = await store.add_link(VALID_LINK_SUBMISSION)

        assert isinstance(result.error, PreconditionError)
        assert durable_calls(mock_store_client) == 0

    @pytest.mark.asyncio
    async def test_add_requires_user(self, mock_store_client):
        store = EntityStore(mock_store_client, hotel=make_hotel())

        result = await store.add_link(VALID_LINK_SUBMISSION)

        assert isinstance(result.error, AuthRequiredError)
        assert durable_calls(mock_store_client) == 0

    @pytest.mark.asyncio
    async def test_add_unknown_field(self, seeded_store, seeded_store_client):
        result = await seeded_store.add_link({**VALID_LINK_SUBMISSION, "order": 1})

        assert isinstance(result.error, FormValidationError)
        assert result.error.errors[0]["field"] == "order"
        seeded_store_client.insert_link.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_missing_required_field(self, seeded_store, seeded_store_client):
        result = await seeded_store.add_link({"title": "Spa"})

        assert isinstance(result.error, FormValidationError)
        assert {error["field"] for error in result.error.errors} == {"url", "category"}
        seeded_store_client.insert_link.assert_not_awaited()


class TestUpdateLink:
    """Test partial link edits."""

    @pytest.mark.asyncio
    async def test_update_persists_only_given_fields(self, seeded_store, seeded_store_client):
        result = await seeded_store.update_link(LINK_IDS[0], {"title": "Guest WiFi"})

        assert result.ok
        assert result.value.title == "Guest WiFi"
        assert result.value.url == "Patagonia2026!"
        seeded_store_client.update_link.assert_awaited_once_with(LINK_IDS[0], {"title": "Guest WiFi"})

    @pytest.mark.asyncio
    async def test_update_failure_keeps_edit(self, abc_store):
        """A failed update is reported but the in-memory edit stays."""
        abc_store.client.update_link.side_effect = StoreClientError("timeout")

        result = await abc_store.update_link("B", {"is_active": False})

        assert isinstance(result.error, PersistenceError)
        assert abc_store.get_link("B").is_active is False
        previous = {link.id: link for link in result.rollback}
        assert previous["B"].is_active is True

    @pytest.mark.asyncio
    async def test_rollback_snapshot_can_be_applied(self, abc_store):
        abc_store.client.update_link.side_effect = StoreClientError("timeout")

        result = await abc_store.update_link("B", {"title": "Renamed"})
        abc_store.restore_links(result.rollback)

        assert abc_store.get_link("B").title == "Link B"

    @pytest.mark.asyncio
    async def test_update_unknown_link(self, abc_store):
        result = await abc_store.update_link("Z", {"title": "Nope"})

        assert isinstance(result.error, NotFoundError)
        assert durable_calls(abc_store.client) == 0

    @pytest.mark.asyncio
    async def test_update_pending_link(self, mock_store_client, test_user):
        store = EntityStore(
            mock_store_client,
            user=test_user,
            hotel=make_hotel(),
            links=[make_link("temp-3", 1)],
        )

        result = await store.update_link("temp-3", {"title": "Too soon"})

        assert isinstance(result.error, PreconditionError)
        assert durable_calls(mock_store_client) == 0

    @pytest.mark.asyncio
    async def test_update_invalid_value(self, abc_store):
        result = await abc_store.update_link("A", {"category": "spa"})

        assert isinstance(result.error, FormValidationError)
        assert abc_store.get_link("A").category == "hotel"
        assert durable_calls(abc_store.client) == 0


class TestDeleteLink:
    """Test optimistic link removal."""

    @pytest.mark.asyncio
    async def test_delete(self, abc_store):
        result = await abc_store.delete_link("B")

        assert result.ok
        assert result.value.id == "B"
        assert _ids(abc_store.links) == ["A", "C"]
        abc_store.client.delete_link.assert_awaited_once_with("B")

    @pytest.mark.asyncio
    async def test_delete_failure_restores_original_order(self, abc_store):
        """[A, B, C] with a failing delete of B is restored to [A, B, C]."""
        abc_store.client.delete_link.side_effect = StoreClientError("permission denied")

        result = await abc_store.delete_link("B")

        assert isinstance(result.error, PersistenceError)
        assert _ids(abc_store.links) == ["A", "B", "C"]
        assert [link.order for link in abc_store.links] == [1, 2, 3]
        assert _ids(result.rollback) == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_overlapping_deletes_roll_back_independently(self, abc_store):
        """A failed delete restores only its own link, not one deleted meanwhile."""
        c_deleted = asyncio.Event()

        async def delete_link(link_id):
            if link_id == "B":
                await c_deleted.wait()
                raise StoreClientError("network error")
            c_deleted.set()

        abc_store.client.delete_link.side_effect = delete_link

        failed, deleted = await asyncio.gather(abc_store.delete_link("B"), abc_store.delete_link("C"))

        assert failed.ok is False
        assert deleted.ok is True
        assert _ids(abc_store.links) == ["A", "B"]

    @pytest.mark.asyncio
    async def test_delete_leaves_gap_until_reorder(self, abc_store):
        """Orders are not compacted on delete; an explicit reorder makes them dense."""
        await abc_store.delete_link("A")

        assert [link.order for link in abc_store.links] == [2, 3]

        result = await abc_store.reorder_links(abc_store.links)

        assert result.ok
        assert [link.order for link in abc_store.links] == [1, 2]

    @pytest.mark.asyncio
    async def test_delete_unknown_link(self, abc_store):
        result = await abc_store.delete_link("Z")

        assert isinstance(result.error, NotFoundError)
        assert durable_calls(abc_store.client) == 0


class TestReorderLinks:
    """Test reordering and its persistence."""

    @pytest.mark.asyncio
    async def test_reorder_persists_changed_rows_only(self, abc_store):
        a, b, c = abc_store.links

        result = await abc_store.reorder_links([b, a, c])

        assert result.ok
        assert _ids(abc_store.links) == ["B", "A", "C"]
        assert [link.order for link in abc_store.links] == [1, 2, 3]
        calls = [call.args for call in abc_store.client.update_link.await_args_list]
        assert calls == [("B", {"order_index": 1}), ("A", {"order_index": 2})]

    @pytest.mark.asyncio
    async def test_reorder_twice_is_idempotent(self, abc_store):
        a, b, c = abc_store.links

        await abc_store.reorder_links([c, b, a])
        first = {link.id: link.order for link in abc_store.links}
        abc_store.client.update_link.reset_mock()

        await abc_store.reorder_links([c, b, a])

        assert {link.id: link.order for link in abc_store.links} == first
        abc_store.client.update_link.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_category_reorder(self, abc_store):
        """Hotel tab [C, A]: C before A, B keeps its order."""
        a, b, c = abc_store.links

        result = await abc_store.reorder_links([c, a], category="hotel")
        orders = {link.id: link.order for link in abc_store.links}

        assert result.ok
        assert orders["C"] < orders["A"]
        assert orders["B"] == 2
        assert _dense(abc_store.links)
        persisted = {call.args[0] for call in abc_store.client.update_link.await_args_list}
        assert persisted == {"A", "C"}

    @pytest.mark.asyncio
    async def test_partial_failure_keeps_memory_and_reports_prefix(self, abc_store):
        a, b, c = abc_store.links
        abc_store.client.update_link.side_effect = [None, StoreClientError("connection reset")]

        result = await abc_store.reorder_links([c, b, a])

        assert result.ok is False
        assert isinstance(result.error, PersistenceError)
        assert result.error.persisted_ids == ["C"]
        # Memory stays reordered; the snapshot restores the old sequence on request
        assert _ids(abc_store.links) == ["C", "B", "A"]
        abc_store.restore_links(result.rollback)
        assert _ids(abc_store.links) == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_reorder_skips_pending_links(self, mock_store_client, test_user):
        a = make_link("A", 1)
        pending = make_link("temp-7", 2)
        store = EntityStore(mock_store_client, user=test_user, hotel=make_hotel(), links=[a, pending])
        mock_store_client.update_link.side_effect = None

        result = await store.reorder_links([pending, a])

        assert result.ok
        mock_store_client.update_link.assert_awaited_once_with("A", {"order_index": 2})

    @pytest.mark.asyncio
    async def test_reorder_during_pending_add_persists_new_order(self, abc_store):
        """A link moved while its insert is pending gets the moved order written after the insert."""
        insert_started = asyncio.Event()
        release_insert = asyncio.Event()
        insert_link = abc_store.client.insert_link.side_effect

        async def slow_insert(hotel_id, fields):
            insert_started.set()
            await release_insert.wait()
            return await insert_link(hotel_id, fields)

        abc_store.client.insert_link.side_effect = slow_insert

        adding = asyncio.create_task(abc_store.add_link(VALID_LINK_SUBMISSION))
        await insert_started.wait()
        pending = abc_store.links[-1]
        a, b, c = abc_store.links[:3]
        reordered = await abc_store.reorder_links([pending, a, b, c])
        release_insert.set()
        added = await adding

        assert reordered.ok and added.ok
        assert added.value.order == 1
        memory = {link.id: link.order for link in abc_store.links}
        durable = {link_id: row["order_index"] for link_id, row in abc_store.client.rows["links"].items()}
        assert memory == durable
        assert sorted(durable.values()) == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_failed_order_write_after_pending_add(self, abc_store):
        insert_started = asyncio.Event()
        release_insert = asyncio.Event()
        insert_link = abc_store.client.insert_link.side_effect

        async def slow_insert(hotel_id, fields):
            insert_started.set()
            await release_insert.wait()
            return await insert_link(hotel_id, fields)

        abc_store.client.insert_link.side_effect = slow_insert

        adding = asyncio.create_task(abc_store.add_link(VALID_LINK_SUBMISSION))
        await insert_started.wait()
        pending = abc_store.links[-1]
        await abc_store.reorder_links([pending, *abc_store.links[:3]])
        abc_store.client.update_link.side_effect = StoreClientError("connection reset")
        release_insert.set()
        added = await adding

        assert added.ok is False
        assert isinstance(added.error, PersistenceError)
        assert added.error.persisted_ids == [abc_store.links[0].id]
        assert not is_placeholder_id(abc_store.links[0].id)

    @pytest.mark.asyncio
    async def test_reorder_rejects_incomplete_sequence(self, abc_store):
        a, b, _ = abc_store.links

        result = await abc_store.reorder_links([b, a])

        assert isinstance(result.error, FormValidationError)
        assert _ids(abc_store.links) == ["A", "B", "C"]
        assert durable_calls(abc_store.client) == 0

    @pytest.mark.asyncio
    async def test_reorder_requires_user(self, abc_store):
        abc_store.user = None

        result = await abc_store.reorder_links(abc_store.links)

        assert isinstance(result.error, AuthRequiredError)


class TestUpdateHotel:
    """Test the hotel upsert."""

    @pytest.mark.asyncio
    async def test_first_save_inserts_then_updates_same_row(self, mock_store_client, test_user):
        store = EntityStore(mock_store_client, user=test_user)

        first = await store.update_hotel({"name": "X"})
        second = await store.update_hotel({"phone": "+54 294 444-1200"})

        assert first.ok and second.ok
        mock_store_client.insert_hotel.assert_awaited_once()
        user_id, payload = mock_store_client.insert_hotel.await_args.args
        assert user_id == test_user.id
        assert payload["name"] == "X"
        mock_store_client.update_hotel.assert_awaited_once()
        assert mock_store_client.update_hotel.await_args.args[0] == first.value.id
        assert second.value.id == first.value.id
        assert second.value.name == "X"

    @pytest.mark.asyncio
    async def test_first_save_defaults_name(self, mock_store_client, test_user):
        store = EntityStore(mock_store_client, user=test_user)

        result = await store.update_hotel({"primary_color": "#0F766E"})

        assert result.value.name == "My Hotel"
        assert mock_store_client.insert_hotel.await_args.args[1]["name"] == "My Hotel"

    @pytest.mark.asyncio
    async def test_first_save_swaps_placeholder_id(self, mock_store_client, test_user):
        store = EntityStore(mock_store_client, user=test_user)

        result = await store.update_hotel({"name": "Hotel Patagonia Lodge"})

        assert result.value.id == "hotel-1"
        assert not is_placeholder_id(store.hotel.id)

    @pytest.mark.asyncio
    async def test_update_stamps_updated_at(self, seeded_store, seeded_store_client):
        before = seeded_store.hotel.updated_at

        result = await seeded_store.update_hotel({"welcome_message": "Hola!"})

        assert result.value.updated_at > before
        payload = seeded_store_client.update_hotel.await_args.args[1]
        assert payload["welcome_message"] == "Hola!"
        assert "updated_at" in payload

    @pytest.mark.asyncio
    async def test_failed_first_save_removes_hotel(self, test_user):
        client = create_mock_store_client(errors={"insert_hotel": StoreClientError("unique violation")})
        store = EntityStore(client, user=test_user)

        result = await store.update_hotel({"name": "X"})

        assert isinstance(result.error, PersistenceError)
        assert store.hotel is None

    @pytest.mark.asyncio
    async def test_failed_update_restores_snapshot(self, test_user):
        client = create_mock_store_client(
            hotel=SAMPLE_HOTEL_ROW,
            errors={"update_hotel": StoreClientError("timeout")},
        )
        store = await EntityStore.load(client, test_user)
        original = store.hotel

        result = await store.update_hotel({"name": "Renamed Lodge"})

        assert isinstance(result.error, PersistenceError)
        assert store.hotel == original
        assert result.rollback == original

    @pytest.mark.asyncio
    async def test_failed_save_keeps_newer_overlapping_save(self, seeded_store, seeded_store_client):
        """A failed save does not undo a save that started after it."""
        first_started = asyncio.Event()
        release_first = asyncio.Event()
        update_hotel = seeded_store_client.update_hotel.side_effect

        async def update(hotel_id, fields):
            if fields.get("name") == "Patagonia Lodge & Spa":
                first_started.set()
                await release_first.wait()
                raise StoreClientError("timeout")
            return await update_hotel(hotel_id, fields)

        seeded_store_client.update_hotel.side_effect = update

        failing = asyncio.create_task(seeded_store.update_hotel({"name": "Patagonia Lodge & Spa"}))
        await first_started.wait()
        saved = await seeded_store.update_hotel({"name": "Lodge Nahuel Huapi"})
        release_first.set()
        failed = await failing

        assert saved.ok is True
        assert isinstance(failed.error, PersistenceError)
        assert failed.rollback.name == "Hotel Patagonia Lodge"
        assert seeded_store.hotel.name == "Lodge Nahuel Huapi"
        assert seeded_store_client.rows["hotel"]["name"] == "Lodge Nahuel Huapi"

    @pytest.mark.asyncio
    async def test_unknown_field(self, mock_store_client, test_user):
        store = EntityStore(mock_store_client, user=test_user)

        result = await store.update_hotel({"user_id": "someone-else"})

        assert isinstance(result.error, FormValidationError)
        assert store.hotel is None
        assert durable_calls(mock_store_client) == 0

    @pytest.mark.asyncio
    async def test_requires_user(self, mock_store_client):
        store = EntityStore(mock_store_client)

        result = await store.update_hotel({"name": "X"})

        assert isinstance(result.error, AuthRequiredError)
        assert durable_calls(mock_store_client) == 0


class TestActivities:
    """Test session-local activities."""

    def test_add_assigns_increasing_ids(self, mock_store_client):
        store = EntityStore(mock_store_client)
        payload = {
            "title": "Kayak",
            "description": "Morning tour",
            "image_url": "https://images.patagonialodge.com/kayak.jpg",
            "weather_condition": "sunny",
        }

        first = store.add_activity(payload).value
        second = store.add_activity(payload).value

        assert int(second.id) > int(first.id)
        assert first.priority == 5
        assert durable_calls(mock_store_client) == 0

    def test_recommendations_sorted_by_priority(self, mock_store_client):
        store = EntityStore(
            mock_store_client,
            activities=[
                make_activity("1", "sunny", priority=3),
                make_activity("2", "rainy", priority=1),
                make_activity("3", "sunny", priority=1),
                make_activity("4", "sunny", priority=3),
                make_activity("5", "sunny", priority=2, is_active=False),
            ],
        )

        assert [activity.id for activity in store.activities_for("sunny")] == ["3", "1", "4"]

    def test_update_and_delete(self, mock_store_client):
        store = EntityStore(mock_store_client, activities=[make_activity("1")])

        assert store.update_activity("1", {"priority": 9}).value.priority == 9
        assert store.delete_activity("1").ok
        assert store.activities == []

    def test_update_rejects_out_of_range_priority(self, mock_store_client):
        store = EntityStore(mock_store_client, activities=[make_activity("1", priority=4)])

        result = store.update_activity("1", {"priority": 11})

        assert isinstance(result.error, FormValidationError)
        assert store.activities[0].priority == 4

    def test_unknown_activity(self, mock_store_client):
        store = EntityStore(mock_store_client)

        assert isinstance(store.update_activity("42", {"priority": 1}).error, NotFoundError)
        assert isinstance(store.delete_activity("42").error, NotFoundError)

    def test_weather_counts(self, mock_store_client):
        store = EntityStore(
            mock_store_client,
            activities=[make_activity("1", "sunny"), make_activity("2", "snowy"), make_activity("3", "sunny")],
        )

        assert store.weather_counts() == {"sunny": 2, "cloudy": 0, "rainy": 0, "snowy": 1}


class TestUser:
    """Test session-local profile edits."""

    def test_update_user(self, mock_store_client, test_user):
        store = EntityStore(mock_store_client, user=test_user)

        result = store.update_user({"name": "Lucia F.", "email": "lucia.f@patagonialodge.com"})

        assert result.value.name == "Lucia F."
        assert store.user.email == "lucia.f@patagonialodge.com"
        assert store.user.role == "owner"
        assert durable_calls(mock_store_client) == 0

    def test_role_is_not_editable(self, mock_store_client, test_user):
        store = EntityStore(mock_store_client, user=test_user)

        result = store.update_user({"role": "staff"})

        assert isinstance(result.error, FormValidationError)
        assert store.user.role == "owner"

    def test_requires_user(self, mock_store_client):
        result = EntityStore(mock_store_client).update_user({"name": "Nobody"})

        assert isinstance(result.error, AuthRequiredError)


class TestReadHelpers:
    """Test derived views."""

    def test_links_in_category(self, abc_store):
        assert _ids(abc_store.links_in("hotel")) == ["A", "C"]
        assert _ids(abc_store.links_in()) == ["A", "B", "C"]

    def test_category_counts(self, abc_store):
        assert abc_store.category_counts() == {"hotel": 2, "activities": 1, "contact": 0}

    def test_stats(self, mock_store_client):
        store = EntityStore(
            mock_store_client,
            links=[make_link("A", 1), make_link("B", 2, is_active=False)],
            activities=[make_activity("1")],
        )

        assert store.stats() == {"total_links": 2, "active_links": 1, "total_activities": 1}

    def test_portal_preview_skips_inactive(self, mock_store_client):
        store = EntityStore(
            mock_store_client,
            links=[
                make_link("A", 1, is_active=False),
                make_link("B", 2),
                make_link("C", 3),
                make_link("D", 4),
                make_link("E", 5),
            ],
        )

        assert _ids(store.portal_preview()) == ["B", "C", "D"]
