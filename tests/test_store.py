import threading

import pytest
from pydantic import ValidationError

from cmdregistry.errors import DuplicateName, InvalidTemplate, SourceUnavailable, TemplateNotFound
from cmdregistry.sources import MappingSource
from cmdregistry.store import Registry, TemplateStore, load


def test_load_builds_registry_from_pairs(registry):
    assert len(registry) == 3
    assert registry.names() == ["fix", "plain", "review"]
    assert "fix" in registry
    assert registry.get("fix").body == "Fix: <ARG>"


def test_load_accepts_plain_iterable_of_pairs():
    registry = load([("a", "A"), ("b", "B")])
    assert set(registry) == {"a", "b"}


def test_load_accepts_plain_dict():
    registry = load({"ab": "Review: $ARGUMENTS", "fix": "Fix: $ARGUMENTS"})
    assert registry.names() == ["ab", "fix"]
    assert registry.get("ab").body == "Review: $ARGUMENTS"


def test_duplicate_name_rejected():
    source = MappingSource([("fix", "one"), ("review", "r"), ("fix", "two")])
    with pytest.raises(DuplicateName) as exc_info:
        load(source)
    assert exc_info.value.name == "fix"
    assert "fix" in str(exc_info.value)


@pytest.mark.parametrize(
    "pairs",
    [
        [("", "body")],
        [(None, "body")],
        [("name", None)],
        [("only-one-element",)],
        ["fx"],
        [b"fx"],
    ],
)
def test_malformed_entries_rejected(pairs):
    with pytest.raises(InvalidTemplate):
        load(pairs)


def test_unreadable_source_reported_as_unavailable():
    def broken():
        yield ("fix", "Fix")
        raise OSError("disk gone")

    with pytest.raises(SourceUnavailable):
        load(broken())


def test_get_unknown_name_raises_template_not_found(registry):
    with pytest.raises(TemplateNotFound) as exc_info:
        registry.get("unknown")
    assert exc_info.value.name == "unknown"
    assert str(exc_info.value) == "Unknown command: unknown"


def test_template_not_found_is_a_key_error(registry):
    with pytest.raises(KeyError):
        registry.get("missing")


def test_registry_is_read_only(registry):
    with pytest.raises(TypeError):
        registry.templates()["new"] = registry.get("fix")


def test_template_body_is_immutable(registry):
    template = registry.get("fix")
    with pytest.raises(ValidationError):
        template.body = "changed"
    assert registry.get("fix").body == "Fix: <ARG>"


def test_registry_copies_input_mapping(registry):
    source = {"fix": registry.get("fix")}
    snapshot = Registry(source)
    source.clear()
    assert "fix" in snapshot


def test_description_uses_first_non_empty_line(registry):
    assert registry.get("plain").description == "Plain"
    assert registry.get("fix").description == "Fix: <ARG>"


def test_reload_publishes_new_snapshot():
    pairs = {"fix": "v1"}
    store = TemplateStore(MappingSource(pairs))
    before = store.snapshot

    store.source = MappingSource({"fix": "v2", "review": "r"})
    after = store.reload()

    assert store.snapshot is after
    assert before.get("fix").body == "v1"
    assert after.get("fix").body == "v2"
    assert len(before) == 1


def test_failed_reload_keeps_previous_snapshot(store):
    before = store.snapshot
    store.source = MappingSource([("fix", "a"), ("fix", "b")])

    with pytest.raises(DuplicateName):
        store.reload()

    assert store.snapshot is before
    assert store.get("fix").body == "Fix: <ARG>"


def test_store_accepts_prebuilt_registry(registry):
    store = TemplateStore(MappingSource({}), registry=registry)
    assert store.snapshot is registry


def test_concurrent_reads_during_reload(store):
    errors = []

    def reader():
        try:
            for _ in range(200):
                assert store.get("fix").body in {"Fix: <ARG>", "Fix v2: <ARG>"}
        except Exception as exc:  # noqa: BLE001
            errors.append(exc)

    store.source = MappingSource({"fix": "Fix v2: <ARG>"})
    threads = [threading.Thread(target=reader) for _ in range(4)]
    for thread in threads:
        thread.start()
    store.reload()
    for thread in threads:
        thread.join()

    assert errors == []
    assert store.get("fix").body == "Fix v2: <ARG>"
