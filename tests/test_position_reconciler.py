"""Tests for drag-and-drop moves and position reconciliation."""

import logging
import random

import pytest
from sqlalchemy.exc import OperationalError

pytestmark = pytest.mark.unit

from studio_catalog.exceptions import (
    DatabaseError,
    InvalidMoveError,
    NotFoundError,
    ValidationError,
)
from studio_catalog.services.catalog_service import CatalogService
from studio_catalog.storage.unit_of_work import UnitOfWork
from studio_catalog.services.positioning import (
    ROOT,
    NodeKind,
    PositionReconciler,
    parse_move_request,
)


def move(service, item_id, item_type, new_index, new_parent_id=None):
    payload = {"item_id": item_id, "item_type": item_type, "new_index": new_index}
    if new_parent_id is not None:
        payload["new_parent_id"] = new_parent_id
    return service.move_node(payload)


class TestSameContainerMoves:
    """Moves that stay inside one container."""

    def test_move_last_section_to_front(self, seeded, assertions):
        """Moving the last root section to index 0 shifts the others down."""
        result = move(seeded.service, "sec-c", "section", 0, "root")

        assert result == {"success": True}
        assert assertions.section_order(seeded.uow) == [
            ("sec-c", 0),
            ("sec-a", 1),
            ("sec-b", 2),
        ]

    def test_section_move_without_parent(self, seeded, assertions):
        """Sections may omit new_parent_id entirely."""
        move(seeded.service, "sec-a", "section", 2)

        assert [sid for sid, _ in assertions.section_order(seeded.uow)] == [
            "sec-b",
            "sec-c",
            "sec-a",
        ]

    def test_index_past_end_lands_last(self, seeded, assertions):
        """Out-of-range indices clamp to the end of the container."""
        move(seeded.service, "item-2", "item", 5, "cat-x")

        assert assertions.item_order(seeded.uow, "cat-x") == [
            ("item-1", 0),
            ("item-3", 1),
            ("item-2", 2),
        ]

    def test_move_to_current_index_is_noop(self, seeded, assertions):
        """Moving a node onto its own position leaves the order untouched."""
        before = assertions.item_order(seeded.uow, "cat-x")

        move(seeded.service, "item-2", "item", 1, "cat-x")

        assert assertions.item_order(seeded.uow, "cat-x") == before

    def test_category_reorder_within_section(self, seeded, assertions):
        """Categories reorder within their section without touching the join record."""
        move(seeded.service, "cat-y", "category", 0, "sec-a")

        assert assertions.category_order(seeded.uow, "sec-a") == [("cat-y", 0), ("cat-x", 1)]
        link = seeded.uow.section_categories.get_by_category_id("cat-y")
        assert link.section_id == "sec-a"

    def test_section_with_root_as_id(self, catalog_service, assertions):
        """A section literally named 'root' is still a root-level move."""
        catalog_service.create_section(name="First", section_id="first")
        catalog_service.create_section(name="Root-ish", section_id="root")

        move(catalog_service, "root", "section", 0, "root")

        assert assertions.section_order(catalog_service.uow) == [("root", 0), ("first", 1)]


class TestCrossContainerMoves:
    """Moves that change a node's parent."""

    def test_move_category_to_other_section(self, seeded, assertions):
        """The source closes its gap, the destination opens one, the join record follows."""
        move(seeded.service, "cat-x", "category", 1, "sec-b")

        assert assertions.category_order(seeded.uow, "sec-a") == [("cat-y", 0)]
        assert assertions.category_order(seeded.uow, "sec-b") == [("cat-z", 0), ("cat-x", 1)]
        link = seeded.uow.section_categories.get_by_category_id("cat-x")
        assert link.section_id == "sec-b"
        assertions.assert_catalog_consistent(seeded.uow)

    def test_move_item_to_front_of_other_category(self, seeded, assertions):
        """Items change category_id and both categories stay contiguous."""
        move(seeded.service, "item-1", "item", 0, "cat-z")

        assert assertions.item_order(seeded.uow, "cat-x") == [("item-2", 0), ("item-3", 1)]
        assert assertions.item_order(seeded.uow, "cat-z") == [("item-1", 0), ("item-j", 1)]
        assert seeded.service.get_item("item-1").category_id == "cat-z"

    def test_move_item_into_empty_category(self, seeded, assertions):
        """A large index into an empty container lands at 0."""
        move(seeded.service, "item-3", "item", 10, "cat-y")

        assert assertions.item_order(seeded.uow, "cat-y") == [("item-3", 0)]
        assert assertions.item_order(seeded.uow, "cat-x") == [("item-1", 0), ("item-2", 1)]

    def test_category_items_travel_with_it(self, seeded):
        """Moving a category does not touch its items."""
        move(seeded.service, "cat-x", "category", 0, "sec-c")

        catalog = seeded.service.get_catalog()
        sec_c = next(s for s in catalog if s["id"] == "sec-c")
        assert [c["id"] for c in sec_c["categories"]] == ["cat-x"]
        assert [i["id"] for i in sec_c["categories"][0]["items"]] == [
            "item-1",
            "item-2",
            "item-3",
        ]


class TestMoveFailures:
    """Rejected moves leave the catalog exactly as it was."""

    def test_unknown_node(self, seeded, assertions):
        before = assertions.item_order(seeded.uow, "cat-x")
        with pytest.raises(NotFoundError):
            move(seeded.service, "missing", "item", 0, "cat-x")
        assert assertions.item_order(seeded.uow, "cat-x") == before

    def test_unknown_destination(self, seeded, assertions):
        """A missing destination parent is rejected before anything is written."""
        with pytest.raises(NotFoundError) as exc_info:
            move(seeded.service, "cat-x", "category", 0, "sec-nope")

        assert exc_info.value.resource_type == "Section"
        assert assertions.category_order(seeded.uow, "sec-a") == [("cat-x", 0), ("cat-y", 1)]

    def test_section_with_non_root_parent(self, seeded):
        with pytest.raises(ValidationError) as exc_info:
            move(seeded.service, "sec-a", "section", 0, "sec-b")
        assert exc_info.value.field == "new_parent_id"

    def test_category_without_parent(self, seeded):
        with pytest.raises(ValidationError) as exc_info:
            seeded.service.move_node({"item_id": "cat-x", "item_type": "category", "new_index": 0})
        assert exc_info.value.field == "new_parent_id"

    def test_relink_failure_rolls_back_everything(self, seeded, assertions, monkeypatch):
        """If the parent update fails, the gap-closing and insertion are undone too."""
        before_a = assertions.category_order(seeded.uow, "sec-a")
        before_b = assertions.category_order(seeded.uow, "sec-b")

        def fail_relink(kind, node_id, new_parent_id):
            raise InvalidMoveError("relink refused", str(kind))

        monkeypatch.setattr(seeded.service.reconciler, "update_parent", fail_relink)

        with pytest.raises(InvalidMoveError):
            move(seeded.service, "cat-x", "category", 0, "sec-b")

        assert assertions.category_order(seeded.uow, "sec-a") == before_a
        assert assertions.category_order(seeded.uow, "sec-b") == before_b
        assert seeded.uow.section_categories.get_by_category_id("cat-x").section_id == "sec-a"

    def test_storage_failure_becomes_database_error(self, seeded, assertions, monkeypatch):
        """Driver errors surface as DatabaseError with nothing persisted."""
        before = assertions.item_order(seeded.uow, "cat-x")

        def broken_relink(kind, node_id, new_parent_id):
            raise OperationalError("UPDATE catalog_items", {}, Exception("disk I/O error"))

        monkeypatch.setattr(seeded.service.reconciler, "update_parent", broken_relink)

        with pytest.raises(DatabaseError) as exc_info:
            move(seeded.service, "item-1", "item", 0, "cat-z")

        assert isinstance(exc_info.value.original_error, OperationalError)
        assert assertions.item_order(seeded.uow, "cat-x") == before
        assert assertions.item_order(seeded.uow, "cat-z") == [("item-j", 0)]


class TestStaleSnapshots:
    """Clients may send indices computed from an outdated view."""

    def test_sequential_moves_from_same_snapshot(self, seeded, assertions):
        """Both moves apply against current state and positions stay contiguous."""
        snapshot = [iid for iid, _ in assertions.item_order(seeded.uow, "cat-x")]
        assert snapshot == ["item-1", "item-2", "item-3"]

        # Both clients computed their index from the same snapshot
        move(seeded.service, "item-3", "item", 0, "cat-x")
        move(seeded.service, "item-1", "item", snapshot.index("item-3"), "cat-x")

        order = assertions.item_order(seeded.uow, "cat-x")
        assertions.assert_contiguous(order)
        # After the first move: [3, 1, 2]; item-1 then goes to index 2
        assert [iid for iid, _ in order] == ["item-3", "item-2", "item-1"]

    def test_random_moves_keep_catalog_consistent(self, seeded, assertions):
        """Any sequence of valid moves leaves every container contiguous."""
        rng = random.Random(1234)
        sections = ["sec-a", "sec-b", "sec-c"]
        categories = ["cat-x", "cat-y", "cat-z"]
        items = ["item-1", "item-2", "item-3", "item-j"]

        for _ in range(60):
            kind = rng.choice(["section", "category", "item"])
            index = rng.randint(0, 5)
            if kind == "section":
                move(seeded.service, rng.choice(sections), kind, index, "root")
            elif kind == "category":
                move(seeded.service, rng.choice(categories), kind, index, rng.choice(sections))
            else:
                move(seeded.service, rng.choice(items), kind, index, rng.choice(categories))
            assertions.assert_catalog_consistent(seeded.uow)

        assert sorted(sid for sid, _ in assertions.section_order(seeded.uow)) == sections


class TestSeparateSessions:
    """Moves from sessions whose loaded nodes are out of date."""

    @pytest.fixture
    def two_services(self, temp_db):
        """Two services on their own sessions over one category of three items."""
        with temp_db.session() as session:
            service = CatalogService(session)
            service.create_section(name="Weddings", section_id="weddings")
            service.create_category(name="Packages", section_id="weddings", category_id="packages")
            service.create_category(name="Add-ons", section_id="weddings", category_id="addons")
            for item_id in ("full-day", "half-day", "elopement"):
                service.create_item(name=item_id.title(), category_id="packages", item_id=item_id)

        session_a = temp_db.SessionLocal()
        session_b = temp_db.SessionLocal()
        yield CatalogService(session_a), CatalogService(session_b)
        session_a.close()
        session_b.close()

    @staticmethod
    def committed_items(temp_db, category_id):
        with temp_db.session() as session:
            return [(i.id, i.position) for i in UnitOfWork(session).items.list_by_category(category_id)]

    def test_stale_positions_are_still_written(self, temp_db, two_services):
        """A move whose target positions equal stale in-memory values still persists."""
        service_a, service_b = two_services
        for item_id in ("full-day", "half-day", "elopement"):
            service_a.get_item(item_id)
        service_a.session.commit()

        move(service_b, "elopement", "item", 0, "packages")
        assert self.committed_items(temp_db, "packages") == [
            ("elopement", 0),
            ("full-day", 1),
            ("half-day", 2),
        ]

        move(service_a, "elopement", "item", 2, "packages")

        assert self.committed_items(temp_db, "packages") == [
            ("full-day", 0),
            ("half-day", 1),
            ("elopement", 2),
        ]

    def test_stale_parent_is_resolved_again(self, temp_db, two_services):
        """A node moved elsewhere by another session is treated as a cross-container move."""
        service_a, service_b = two_services
        assert service_a.get_item("full-day").category_id == "packages"
        service_a.session.commit()

        move(service_b, "full-day", "item", 0, "addons")
        move(service_a, "full-day", "item", 0, "packages")

        assert self.committed_items(temp_db, "addons") == []
        assert self.committed_items(temp_db, "packages") == [
            ("full-day", 0),
            ("half-day", 1),
            ("elopement", 2),
        ]


class TestReconcilerPrimitives:
    """Direct tests of PositionReconciler building blocks."""

    def test_close_gap_keeps_relative_order(self, seeded, assertions):
        reconciler = seeded.service.reconciler
        with seeded.uow.transaction():
            order = reconciler.close_gap(NodeKind.ITEM, "cat-x", "item-1")

        assert order == ["item-2", "item-3"]
        pairs = dict(assertions.item_order(seeded.uow, "cat-x"))
        assert pairs["item-2"] == 0
        assert pairs["item-3"] == 1

    def test_insert_at_clamps(self, seeded):
        reconciler = seeded.service.reconciler
        with seeded.uow.transaction():
            order = reconciler.insert_at(NodeKind.SECTION, ROOT, "sec-a", 99, False)
        assert order == ["sec-b", "sec-c", "sec-a"]

    def test_renumber_assigns_list_index(self, seeded, assertions):
        reconciler = seeded.service.reconciler
        with seeded.uow.transaction():
            reconciler.renumber("section", ["sec-b", "sec-a", "sec-c"])
        assert assertions.section_order(seeded.uow) == [
            ("sec-b", 0),
            ("sec-a", 1),
            ("sec-c", 2),
        ]

    @pytest.mark.parametrize("bad_parent", [None, "", "   ", 42])
    def test_update_parent_rejects_unusable_parent(self, seeded, bad_parent):
        with pytest.raises(InvalidMoveError) as exc_info:
            seeded.service.reconciler.update_parent(NodeKind.CATEGORY, "cat-x", bad_parent)
        assert exc_info.value.node_type == "category"

    def test_update_parent_is_noop_for_sections(self, seeded, assertions):
        before = assertions.section_order(seeded.uow)
        seeded.service.reconciler.update_parent(NodeKind.SECTION, "sec-a", None)
        assert assertions.section_order(seeded.uow) == before

    def test_update_parent_missing_join_record(self, seeded):
        with pytest.raises(NotFoundError) as exc_info:
            seeded.service.reconciler.update_parent(NodeKind.CATEGORY, "cat-missing", "sec-b")
        assert exc_info.value.resource_type == "SectionCategory"

    def test_unknown_kind(self, seeded):
        with pytest.raises(ValidationError) as exc_info:
            seeded.service.reconciler.fetch_siblings("widget", None)
        assert exc_info.value.field == "item_type"

    def test_move_outcome(self, seeded):
        request = parse_move_request(
            {"itemId": "item-2", "itemType": "item", "newParentId": "cat-z", "newIndex": 0}
        )
        with seeded.uow.transaction():
            outcome = seeded.service.reconciler.move(request)

        assert outcome.cross_container is True
        assert outcome.source_parent_id == "cat-x"
        assert outcome.destination_parent_id == "cat-z"
        assert outcome.order == ("item-2", "item-j")


class TestTraceLogging:
    """The reconciler reports its decisions through an injected logger."""

    def test_trace_events(self, db_session, caplog):
        trace_logger = logging.getLogger("tests.reconciler")
        service = CatalogService(db_session, reconciler_logger=trace_logger)
        service.create_section(name="One", section_id="s1")
        service.create_section(name="Two", section_id="s2")
        service.create_category(name="Cat", section_id="s1", category_id="c1")

        with caplog.at_level(logging.DEBUG, logger="tests.reconciler"):
            move(service, "c1", "category", 0, "s2")

        messages = [r.getMessage() for r in caplog.records if r.name == "tests.reconciler"]
        assert messages == ["move classified", "detach computed", "insertion computed"]

        insertion = next(r for r in caplog.records if r.getMessage() == "insertion computed")
        assert insertion.order == ["c1"]
        assert insertion.cross_container is True

    def test_reconciler_defaults_to_module_logger(self, seeded):
        reconciler = PositionReconciler(seeded.uow)
        assert reconciler.logger.name == "studio_catalog.services.positioning.reconciler"
