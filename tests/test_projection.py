import pytest

from catalogresolver.projection import (
    Property,
    properties_annotation_from_property_list,
    property_list_from_properties_annotation,
)


def test_empty_list_serialises_to_empty_object():
    assert properties_annotation_from_property_list([]) == "{}"


def test_serialised_form():
    props = [Property("olm.package", '{"packageName":"etcd","version":"0.9.0"}')]
    assert properties_annotation_from_property_list(props) == (
        '{"properties":[{"type":"olm.package",'
        '"value":{"packageName":"etcd","version":"0.9.0"}}]}'
    )


def test_whitespace_is_removed_from_values():
    annotation = properties_annotation_from_property_list(
        [Property("olm.gvk", '{ "group" : "a b",\n "kind": "K" }')]
    )
    assert " " not in annotation.replace("a b", "")
    assert '"a b"' in annotation


def test_round_trip():
    props = [
        Property("olm.package", '{"packageName":"etcd","version":"0.9.0"}'),
        Property("olm.label", '"somelabel"'),
        Property("olm.maxOpenShiftVersion", "4.8"),
    ]
    annotation = properties_annotation_from_property_list(props)
    assert property_list_from_properties_annotation(annotation) == props


def test_invalid_value_raises():
    with pytest.raises(ValueError):
        properties_annotation_from_property_list([Property("olm.package", "{not json")])


def test_empty_value_raises():
    with pytest.raises(ValueError):
        properties_annotation_from_property_list([Property("olm.package", "")])


def test_parse_keeps_raw_value_text():
    raw = '{"properties": [{"type": "t", "value": { "a" : 1 }}]}'
    assert property_list_from_properties_annotation(raw) == [Property("t", '{ "a" : 1 }')]


def test_parse_empty_object():
    assert property_list_from_properties_annotation("{}") == []


def test_parse_invalid_raises():
    with pytest.raises(ValueError):
        property_list_from_properties_annotation("{")


def test_parse_wrong_shape_raises():
    with pytest.raises(ValueError):
        property_list_from_properties_annotation('{"properties": 5}')


def test_parse_non_string_type_raises():
    with pytest.raises(ValueError):
        property_list_from_properties_annotation('{"properties": [{"type": 3, "value": 1}]}')