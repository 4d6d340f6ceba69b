import json

import pytest

from catalogresolver.cache import Entry
from catalogresolver.projection import Property
from catalogresolver.registry import CatalogKey
from catalogresolver.sources import (
    Dependency,
    SourceInvalidator,
    ensure_package_property,
    legacy_dependencies_to_properties,
)


def test_valid_event_is_shared_until_invalidated():
    invalidator = SourceInvalidator()
    key = CatalogKey("cat", "ns")
    first = invalidator.valid_event(key)
    assert invalidator.valid_event(key) is first
    assert not first.is_set()
    invalidator.invalidate(key)
    assert first.is_set()
    second = invalidator.valid_event(key)
    assert second is not first
    assert not second.is_set()


def test_invalidate_unknown_key_leaves_others_alone():
    invalidator = SourceInvalidator()
    event = invalidator.valid_event(CatalogKey("a", "ns"))
    invalidator.invalidate(CatalogKey("b", "ns"))
    assert not event.is_set()


def test_event_expires_after_ttl():
    invalidator = SourceInvalidator(ttl=0.01)
    key = CatalogKey("cat", "ns")
    event = invalidator.valid_event(key)
    assert event.wait(timeout=5)
    fresh = invalidator.valid_event(key)
    assert fresh is not event


def test_ensure_package_property_adds_once():
    entry = Entry(name="op")
    ensure_package_property(entry, "etcd", "0.9.0")
    ensure_package_property(entry, "other", "1.0.0")
    assert len(entry.properties) == 1
    prop = entry.properties[0]
    assert prop.type == "olm.package"
    assert json.loads(prop.value) == {"packageName": "etcd", "version": "0.9.0"}


def test_ensure_package_property_keeps_existing():
    existing = Property(type="olm.package", value='{"packageName":"x","version":"1"}')
    entry = Entry(properties=[existing])
    ensure_package_property(entry, "etcd", "0.9.0")
    assert entry.properties == [existing]


def test_legacy_gvk_dependency():
    deps = [Dependency("olm.gvk", '{"kind":"K","group":"g","version":"v1","extra":1}')]
    props = legacy_dependencies_to_properties(deps)
    assert [p.type for p in props] == ["olm.gvk.required"]
    assert props[0].value == '{"group":"g","version":"v1","kind":"K"}'


def test_legacy_package_dependency_renames_version():
    deps = [Dependency("olm.package", '{"packageName":"etcd","version":">=0.9.0"}')]
    props = legacy_dependencies_to_properties(deps)
    assert props[0].type == "olm.package.required"
    assert json.loads(props[0].value) == {"packageName": "etcd", "versionRange": ">=0.9.0"}


def test_legacy_label_and_constraint_pass_through_and_unknown_dropped():
    deps = [
        Dependency("olm.label", '{"label":"x"}'),
        Dependency("olm.constraint", '{"cel":{}}'),
        Dependency("olm.unknown", "{}"),
    ]
    props = legacy_dependencies_to_properties(deps)
    assert props == [
        Property("olm.label.required", '{"label":"x"}'),
        Property("olm.constraint", '{"cel":{}}'),
    ]


def test_legacy_empty_list():
    assert legacy_dependencies_to_properties([]) == []


@pytest.mark.parametrize(
    "dep_type, value",
    [("olm.gvk", "not json"), ("olm.package", "[1]"), ("olm.gvk", '{"kind":3}')],
)
def test_legacy_malformed_values_raise(dep_type, value):
    with pytest.raises(ValueError, match=f"failed to unmarshal legacy '{dep_type}' dependency"):
        legacy_dependencies_to_properties([Dependency(dep_type, value)])