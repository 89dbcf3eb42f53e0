"""Tests for the Manipulator base lifecycle."""

import warnings

import pytest

from protoforge import (
    AlreadyExistsError,
    InvalidArgumentError,
    LifecycleState,
    LocalStore,
    Manipulator,
    ManipulatorCommittedError,
    ManipulatorSettings,
    NotFoundError,
    Origin,
    StaleCommitWarning,
)
from protoforge.manipulator import deep_merge


class Widget(Manipulator):
    kind = "widget"


class Gadget(Manipulator):
    kind = "gadget"


@pytest.fixture
def widgets():
    return LocalStore(
        [
            {"type": "widget", "name": "w1", "size": 3, "tags": ["a"], "style": {"color": "red"}},
            {"type": "widget", "name": "w2", "size": 5},
            {"type": "gadget", "name": "w1"},
        ]
    )


class TestLoad:
    def test_load_existing_by_name(self, widgets):
        w = Widget.load(widgets, "w1")
        assert w.name == "w1"
        assert w.origin is Origin.LOADED
        assert w.state is LifecycleState.PENDING
        assert w.get()["size"] == 3

    def test_load_missing_name(self, widgets):
        with pytest.raises(NotFoundError, match="No such widget: nope"):
            Widget.load(widgets, "nope")

    def test_load_new_table_forces_kind(self, widgets):
        w = Widget.load(widgets, {"name": "w3", "size": 1})
        assert w.origin is Origin.NEW
        assert w.get() == {"type": "widget", "name": "w3", "size": 1}

    def test_load_new_table_copies_input(self, widgets):
        table = {"name": "w3", "tags": ["x"]}
        w = Widget.load(widgets, table)
        table["tags"].append("y")
        assert w.get()["tags"] == ["x"]

    def test_load_table_with_existing_name(self, widgets):
        with pytest.raises(AlreadyExistsError):
            Widget.load(widgets, {"name": "w1"})

    def test_same_name_in_other_kind_does_not_collide(self, widgets):
        assert Gadget.load(widgets, {"name": "w2"}).name == "w2"

    @pytest.mark.parametrize(
        "table",
        [{}, {"name": ""}, {"name": 7}, {"name": "x", "type": "gadget"}, {"name": "x", "type": 1}],
    )
    def test_load_malformed_table(self, widgets, table):
        with pytest.raises(InvalidArgumentError):
            Widget.load(widgets, table)

    @pytest.mark.parametrize("source", [None, 3, ["w1"]])
    def test_load_wrong_type(self, widgets, source):
        with pytest.raises(InvalidArgumentError):
            Widget.load(widgets, source)


class TestGetSet:
    def test_get_is_isolated(self, widgets):
        w = Widget.load(widgets, "w1")
        record = w.get()
        record["tags"].append("mutated")
        record["size"] = 99
        assert w.get()["tags"] == ["a"]
        assert w.get()["size"] == 3

    def test_loaded_copy_is_isolated_from_store(self, widgets):
        w = Widget.load(widgets, "w1")
        w.set({"size": 10})
        assert widgets.get("widget", "w1")["size"] == 3

    def test_set_merges_recursively(self, widgets):
        w = Widget.load(widgets, "w1").set({"style": {"width": 2}, "size": 4})
        assert w.get()["style"] == {"color": "red", "width": 2}
        assert w.get()["size"] == 4

    def test_set_replaces_lists_and_removes_none(self, widgets):
        w = Widget.load(widgets, "w1").set({"tags": ["b"], "size": None})
        assert w.get()["tags"] == ["b"]
        assert "size" not in w.get()

    def test_set_drops_none_in_new_nested_field(self, widgets):
        w = Widget.load(widgets, "w2").set({"style": {"color": "blue", "size": None}})
        assert w.get()["style"] == {"color": "blue"}

    def test_set_removes_none_in_existing_nested_field(self, widgets):
        w = Widget.load(widgets, "w1").set({"style": {"color": None, "weight": 2}})
        assert w.get()["style"] == {"weight": 2}

    @pytest.mark.parametrize("fields", [{"name": "other"}, {"type": "gadget"}])
    def test_set_rejects_immutable_fields(self, widgets, fields):
        with pytest.raises(InvalidArgumentError):
            Widget.load(widgets, "w1").set(fields)

    def test_set_rejects_non_mapping(self, widgets):
        with pytest.raises(InvalidArgumentError):
            Widget.load(widgets, "w1").set(["size", 1])

    def test_deep_merge_does_not_mutate_target(self):
        target = {"a": {"b": 1}}
        merged = deep_merge(target, {"a": {"c": 2}})
        assert target == {"a": {"b": 1}}
        assert merged == {"a": {"b": 1, "c": 2}}


class TestCopy:
    def test_copy_creates_new_pending_manipulator(self, widgets):
        original = Widget.load(widgets, "w1")
        clone = original.copy("w1-copy")
        assert clone.name == "w1-copy"
        assert clone.origin is Origin.NEW
        assert clone.get()["size"] == 3
        assert not Widget.exists(widgets, "w1-copy")

    def test_copy_to_existing_name(self, widgets):
        with pytest.raises(AlreadyExistsError):
            Widget.load(widgets, "w1").copy("w2")

    def test_copy_is_independent(self, widgets):
        original = Widget.load(widgets, "w1")
        clone = original.copy("w1-copy").set({"size": 1})
        assert original.get()["size"] == 3
        assert clone.get()["size"] == 1


class TestCommit:
    def test_nothing_visible_before_commit(self, widgets):
        Widget.load(widgets, "w1").set({"size": 100}).set({"tags": []})
        assert Widget.load(widgets, "w1").get()["size"] == 3

    def test_commit_publishes_and_returns_self(self, widgets):
        w = Widget.load(widgets, "w1").set({"size": 100})
        assert w.commit() is w
        assert w.state is LifecycleState.COMMITTED
        assert widgets.get("widget", "w1")["size"] == 100

    def test_commit_overwrites_without_leftovers(self, widgets):
        Widget.load(widgets, "w1").set({"style": None, "tags": None}).commit()
        assert Widget.load(widgets, "w1").get() == {"type": "widget", "name": "w1", "size": 3}

    def test_new_manipulator_commit_creates_entry(self, widgets):
        Widget.load(widgets, {"name": "w3"}).commit()
        assert Widget.exists(widgets, "w3")

    def test_committed_manipulator_rejects_mutation(self, widgets):
        w = Widget.load(widgets, "w1").commit()
        with pytest.raises(ManipulatorCommittedError):
            w.set({"size": 1})
        with pytest.raises(ManipulatorCommittedError):
            w.commit()

    def test_committed_manipulator_can_still_be_read_and_copied(self, widgets):
        w = Widget.load(widgets, "w1").commit()
        assert w.get()["size"] == 3
        assert w.copy("w9").name == "w9"

    def test_last_commit_wins(self, widgets):
        first = Widget.load(widgets, "w1").set({"size": 1})
        second = Widget.load(widgets, "w1").set({"size": 2})
        second.commit()
        first.commit()
        assert widgets.get("widget", "w1")["size"] == 1

    def test_stale_commit_warning_when_enabled(self, widgets):
        settings = ManipulatorSettings(warn_on_overwrite=True)
        first = Widget.load(widgets, "w1", settings)
        Widget.load(widgets, "w1", settings).set({"size": 2}).commit()

        with pytest.warns(StaleCommitWarning):
            first.commit()

    def test_no_stale_warning_by_default(self, widgets, settings):
        first = Widget.load(widgets, "w1", settings)
        Widget.load(widgets, "w1", settings).set({"size": 2}).commit()

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            first.commit()

    def test_no_stale_warning_for_remove_then_commit(self, widgets):
        settings = ManipulatorSettings(warn_on_overwrite=True)
        w = Widget.load(widgets, "w1", settings)

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            w.remove().commit()


class TestRemove:
    def test_remove_is_immediate(self, widgets):
        w = Widget.load(widgets, "w1").remove()
        assert not Widget.exists(widgets, "w1")
        assert w.get()["size"] == 3

    def test_remove_then_commit_reinserts(self, widgets):
        Widget.load(widgets, "w1").set({"size": 7}).remove().commit()
        assert widgets.get("widget", "w1")["size"] == 7


class TestOperators:
    def test_equality_by_kind_and_name(self, widgets):
        assert Widget.load(widgets, "w1") == Widget.load(widgets, "w1")
        assert Widget.load(widgets, "w1") != Widget.load(widgets, "w2")
        assert Widget.load(widgets, "w1") != Gadget.load(widgets, "w1")
        assert Widget.load(widgets, "w1") != "w1"
        assert Widget.load(widgets, "w1").equals(Widget.load(widgets, "w1").set({"size": 0}))

    def test_hash_matches_equality(self, widgets):
        assert len({Widget.load(widgets, "w1"), Widget.load(widgets, "w1")}) == 1

    def test_merge_operator_copies_fields_except_identity(self, widgets):
        w1 = Widget.load(widgets, "w1")
        result = w1 + Widget.load(widgets, "w2")
        assert result is w1
        assert w1.name == "w1"
        assert w1.get()["size"] == 5
        assert w1.get()["tags"] == ["a"]

    def test_merge_requires_same_manipulator_class(self, widgets):
        with pytest.raises(InvalidArgumentError):
            Widget.load(widgets, "w1").merge_from(Gadget.load(widgets, "w1"))

    def test_describe(self, widgets):
        w = Widget.load(widgets, "w1")
        assert w.describe() == "[widget: w1]"
        assert str(w) == "[widget: w1]"
        assert repr(w) == "Widget(name='w1', state=PENDING)"


class TestDiscovery:
    def test_exists(self, widgets):
        assert Widget.exists(widgets, "w1")
        assert not Widget.exists(widgets, "w9")

    def test_exists_requires_string(self, widgets):
        with pytest.raises(InvalidArgumentError):
            Widget.exists(widgets, 1)

    def test_find(self, widgets):
        assert Widget.find(widgets, lambda record: record.get("size", 0) > 4) == ["w2"]
        assert Gadget.find(widgets, lambda record: True) == ["w1"]

    def test_find_cannot_mutate_store(self, widgets):
        def meddle(record):
            record["size"] = -1
            return True

        Widget.find(widgets, meddle)
        assert widgets.get("widget", "w1")["size"] == 3

    def test_find_skips_records_without_name(self, widgets):
        widgets.put("widget", "unnamed", {"type": "widget", "size": 9})
        assert Widget.find(widgets, lambda record: True) == ["w1", "w2"]

    def test_find_requires_callable(self, widgets):
        with pytest.raises(InvalidArgumentError):
            Widget.find(widgets, "w1")
