from __future__ import annotations

import copy
import threading

import pytest

from bundle.core.errors import InvalidKeyError
from bundle.core.typed_map import RuntimeBundle
from tests.bundle.conftest import Point, RecordingLogger


def test_new_bundle_is_empty_until_first_put_and_after_clear() -> None:
    bundle = RuntimeBundle()
    assert bundle.is_empty()
    assert bundle.size() == 0

    bundle.put("key", 1)
    assert not bundle.is_empty()
    assert bundle.size() == 1
    assert len(bundle) == 1

    bundle.clear()
    assert bundle.is_empty()
    assert bundle.size() == 0


def test_put_then_get_returns_same_object() -> None:
    bundle = RuntimeBundle()
    payload = Point(1, 2)
    items = [1, 2, 3]
    bundle.put("point", payload)
    bundle.put("items", items)
    assert bundle.get("point") is payload
    assert bundle.get("items") is items


@pytest.mark.parametrize("key", [None, "", "   ", "\t\n"])
def test_put_rejects_missing_or_blank_keys_without_mutation(key) -> None:
    bundle = RuntimeBundle()
    bundle.put("kept", 1)
    with pytest.raises(InvalidKeyError):
        bundle.put(key, object())
    assert bundle.snapshot() == {"kept": 1}


def test_invalid_key_error_is_value_error() -> None:
    bundle = RuntimeBundle()
    with pytest.raises(ValueError):
        bundle.put_object("", 1)
    with pytest.raises(InvalidKeyError):
        bundle.put(42, 1)  # type: ignore[arg-type]


def test_typed_puts_forward_without_validating_value() -> None:
    bundle = RuntimeBundle()
    bundle.put_int("count", "not-an-int")
    assert bundle.get("count") == "not-an-int"
    with pytest.raises(InvalidKeyError):
        bundle.put_string(" ", "value")


def test_keys_are_stored_exactly_as_given() -> None:
    bundle = RuntimeBundle()
    bundle.put(" padded ", 1)
    assert bundle.contains_key(" padded ")
    assert not bundle.contains_key("padded")


def test_put_overwrites_existing_key() -> None:
    bundle = RuntimeBundle()
    bundle.put("key", "first")
    bundle.put("key", "second")
    assert bundle.size() == 1
    assert bundle.get("key") == "second"


def test_put_accepts_none_value_and_generic_get_collapses_it_to_default() -> None:
    bundle = RuntimeBundle()
    bundle.put("empty", None)
    assert bundle.contains_key("empty")
    assert bundle.get("empty") is None
    assert bundle.get("empty", "fallback") == "fallback"
    assert bundle.get("absent", "fallback") == "fallback"


def test_generic_get_never_logs() -> None:
    logger = RecordingLogger()
    bundle = RuntimeBundle(logger=logger)
    bundle.put("count", 5)
    assert bundle.get("count", "x") == 5
    assert logger.calls == []


def test_remove_returns_previous_value_and_ignores_missing_key() -> None:
    bundle = RuntimeBundle()
    bundle.put("key", "value")
    assert bundle.remove("key") == "value"
    assert bundle.remove("key") is None
    assert not bundle.contains_key("key")


def test_contains_iteration_and_keys_follow_insertion_order() -> None:
    bundle = RuntimeBundle()
    bundle.put("b", 1)
    bundle.put("a", 2)
    assert "a" in bundle
    assert "c" not in bundle
    assert bundle.keys() == ("b", "a")
    assert list(bundle) == ["b", "a"]


def test_capacity_is_a_hint_only() -> None:
    bundle = RuntimeBundle(16)
    assert bundle.capacity == 16
    assert bundle.is_empty()
    with pytest.raises(ValueError):
        RuntimeBundle(-1)


def test_copy_shares_values_but_not_associations() -> None:
    original = RuntimeBundle()
    shared = [1, 2]
    original.put("shared", shared)
    original.put("only_original", "x")

    clone = RuntimeBundle.copy_of(original)
    clone.put("only_clone", "y")
    clone.remove("only_original")

    assert original.keys() == ("shared", "only_original")
    assert clone.keys() == ("shared", "only_clone")

    clone.get_int_list("shared").append(3)
    assert original.get("shared") == [1, 2, 3]
    assert original.get("shared") is clone.get("shared")


def test_copy_variants_produce_independent_bundles() -> None:
    original = RuntimeBundle()
    original.put("a", 1)
    for clone in (original.copy(), copy.copy(original)):
        assert isinstance(clone, RuntimeBundle)
        clone.put("b", 2)
        assert clone.snapshot() == {"a": 1, "b": 2}
    assert original.snapshot() == {"a": 1}


def test_copy_keeps_source_logger_unless_overridden() -> None:
    source_logger = RecordingLogger()
    other_logger = RecordingLogger()
    original = RuntimeBundle(logger=source_logger)
    original.put("count", 5)

    RuntimeBundle.copy_of(original).get_string("count")
    RuntimeBundle.copy_of(original, logger=other_logger).get_string("count")

    assert len(source_logger.warnings()) == 1
    assert len(other_logger.warnings()) == 1


def test_merge_other_wins_and_untouched_keys_survive() -> None:
    target = RuntimeBundle()
    target.put("kept", "mine")
    target.put("shared", "mine")
    source = RuntimeBundle()
    source.put("shared", "theirs")
    source.put("added", 3)

    target.merge(source)

    assert target.snapshot() == {"kept": "mine", "shared": "theirs", "added": 3}
    assert source.snapshot() == {"shared": "theirs", "added": 3}


def test_merge_accepts_plain_mapping_and_validates_all_keys_first() -> None:
    target = RuntimeBundle()
    target.merge({"a": 1})
    assert target.get("a") == 1

    with pytest.raises(InvalidKeyError):
        target.merge({"b": 2, " ": 3})
    assert target.snapshot() == {"a": 1}


def test_snapshot_is_shallow_copy() -> None:
    bundle = RuntimeBundle()
    values = [1]
    bundle.put("values", values)
    snapshot = bundle.snapshot()
    snapshot["other"] = 2
    assert not bundle.contains_key("other")
    assert snapshot["values"] is values


def test_describe_renders_sorted_entries() -> None:
    bundle = RuntimeBundle()
    bundle.put("zeta", "z")
    bundle.put("alpha", 1)
    bundle.put("items", [1, 2])
    assert bundle.describe() == "RuntimeBundle{alpha=1, items=[1, 2], zeta='z'}"
    assert repr(bundle) == bundle.describe()
    assert str(bundle) == bundle.describe()
    assert RuntimeBundle().describe() == "RuntimeBundle{}"


def test_describe_waits_while_another_render_holds_the_lock() -> None:
    bundle = RuntimeBundle()
    bundle.put("key", 1)
    results: list[str] = []

    bundle._describe_lock.acquire()
    worker = threading.Thread(target=lambda: results.append(bundle.describe()))
    try:
        worker.start()
        worker.join(timeout=0.05)
        assert worker.is_alive()
        assert results == []
    finally:
        bundle._describe_lock.release()
    worker.join(timeout=1.0)
    assert results == ["RuntimeBundle{key=1}"]


def test_describe_is_consistent_across_concurrent_callers() -> None:
    bundle = RuntimeBundle()
    for index in range(20):
        bundle.put(f"key{index:02d}", index)
    expected = bundle.describe()
    results: list[str] = []
    lock = threading.Lock()

    def render() -> None:
        value = bundle.describe()
        with lock:
            results.append(value)

    threads = [threading.Thread(target=render) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert results == [expected] * 8


def test_describe_renders_self_reference_without_recursing() -> None:
    bundle = RuntimeBundle()
    bundle.put("name", "loop")
    bundle.put("self", bundle)
    results: list[str] = []

    worker = threading.Thread(target=lambda: results.append(bundle.describe()))
    worker.start()
    worker.join(timeout=1.0)

    assert not worker.is_alive()
    assert results == ["RuntimeBundle{name='loop', self=RuntimeBundle{...}}"]
    assert repr(bundle) == results[0]


def test_describe_handles_bundles_referencing_each_other() -> None:
    first = RuntimeBundle()
    second = RuntimeBundle()
    first.put("other", second)
    second.put("other", first)

    assert first.describe() == "RuntimeBundle{other=RuntimeBundle{other=RuntimeBundle{...}}}"
    assert second.describe() == "RuntimeBundle{other=RuntimeBundle{other=RuntimeBundle{...}}}"
