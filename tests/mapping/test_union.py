from dataclasses import dataclass
from typing import ClassVar

import pytest

from pages.mapping import decode, encode, equals, field, mapped, register, types
from pages.mapping.errors import (
    MissingFieldError,
    MissingVariantTagError,
    SchemaDefinitionError,
    TypeMismatchError,
    UnknownVariantTagError,
)
from pages.mapping.path import ROOT
from pages.mapping.union import TypeField

from tests.mapping.models import (
    BarChart,
    Component,
    DataSourceType,
    EmbeddedDataSource,
    LineChart,
    ReferenceDataSource,
    VisType,
)


@mapped(field("size", types.Number))
@dataclass(frozen=True)
class VariantA:
    type: ClassVar[str] = "a"

    size: float


@mapped(field("name", types.String))
@dataclass(frozen=True)
class VariantB:
    type: ClassVar[str] = "b"

    name: str


AorB = TypeField.of([VariantA, VariantB])


def test_dispatches_on_tag() -> None:
    a = decode({"type": "a", "size": 3}, AorB)
    b = decode({"type": "b", "name": "x"}, AorB)
    assert isinstance(a, VariantA) and a.size == 3
    assert isinstance(b, VariantB) and b.name == "x"
    assert AorB.tags == ("a", "b")


def test_unknown_tag_lists_known_tags() -> None:
    with pytest.raises(UnknownVariantTagError) as info:
        decode({"type": "c", "size": 1}, AorB)
    assert "expected one of: a, b" in str(info.value)
    assert info.value.tag == "c"
    assert info.value.expected == ("a", "b")
    assert info.value.path == "object"


def test_missing_tag() -> None:
    with pytest.raises(MissingVariantTagError, match=r"^object: missing field: type$"):
        decode({"size": 1}, AorB)


def test_non_object_input() -> None:
    with pytest.raises(TypeMismatchError, match="expected object"):
        decode("a", AorB)


def test_encode_reemits_tag() -> None:
    raw = {"type": "b", "name": "x"}
    assert encode(decode(raw, AorB), AorB) == raw


def test_nested_unions_round_trip() -> None:
    raw = {
        "id": "c9",
        "title": "Throughput",
        "visualization": {
            "type": "bar-chart",
            "stacked": False,
            "gap": 2,
            "dataSource": {"type": "reference", "id": "ds7"},
        },
    }
    component = decode(raw, Component)
    assert isinstance(component.visualization, BarChart)
    assert isinstance(component.visualization.dataSource, ReferenceDataSource)
    assert encode(component) == raw


def test_variant_errors_keep_union_path() -> None:
    raw = {
        "id": "c1",
        "title": "",
        "visualization": {"type": "line-chart", "stacked": False, "dataSource": {}},
    }
    with pytest.raises(MissingFieldError, match=r"^object\.visualization\.zeroBased: missing value$"):
        decode(raw, Component)


def test_variant_payload_without_tag_in_nested_union() -> None:
    raw = {
        "id": "c1",
        "title": "",
        "visualization": {"type": "line-chart", "stacked": False, "zeroBased": True, "dataSource": {}},
    }
    with pytest.raises(MissingVariantTagError) as info:
        decode(raw, Component)
    assert info.value.path == "object.visualization.dataSource"


def test_encode_rejects_unregistered_tag() -> None:
    source = EmbeddedDataSource(query="q")
    with pytest.raises(UnknownVariantTagError, match="does not correspond to a sub-type: embedded"):
        VisType.encode(source, ROOT)


def test_equals_is_variant_discriminating() -> None:
    raw = {
        "type": "line-chart",
        "stacked": False,
        "zeroBased": False,
        "dataSource": {"type": "embedded", "query": ""},
    }
    line = decode(raw, VisType)
    same = decode(raw, VisType)
    assert isinstance(line, LineChart)
    assert VisType.equals(line, same)
    assert equals(line, same)
    assert not DataSourceType.equals(EmbeddedDataSource(query="1"), ReferenceDataSource(id="1"))


def test_duplicate_tags_are_rejected() -> None:
    with pytest.raises(SchemaDefinitionError, match="duplicate variant tag: a"):
        TypeField(lambda v: v.type, [("a", VariantA), ("a", VariantB)])


def test_variant_without_tag_attribute_is_rejected() -> None:
    @dataclass(frozen=True)
    class Untagged:
        size: float

    with pytest.raises(SchemaDefinitionError, match="no string 'type' attribute"):
        TypeField.of([VariantA, Untagged])


def test_variant_may_not_declare_reserved_key() -> None:
    @dataclass(frozen=True)
    class Shadowing:
        type: str

    register(Shadowing, field("type", types.String))
    with pytest.raises(SchemaDefinitionError, match="reserved field: type"):
        TypeField(lambda v: "s", [("s", Shadowing)])


def test_explicit_type_function() -> None:
    union = TypeField(lambda v: "big" if v.size > 10 else "a", [("a", VariantA)])
    with pytest.raises(UnknownVariantTagError):
        union.encode(VariantA(size=11), ROOT)
    assert union.encode(VariantA(size=1), ROOT) == {"size": 1, "type": "a"}


def test_optional_union_entry() -> None:
    @mapped(field("main", AorB), field("extra", AorB, optional=True))
    @dataclass(frozen=True)
    class Holder:
        main: object
        extra: object

    holder = decode({"main": {"type": "a", "size": 1}}, Holder)
    assert encode(holder) == {"main": {"size": 1, "type": "a"}}
    full = decode({"main": {"type": "a", "size": 1}, "extra": {"type": "b", "name": "n"}}, Holder)
    assert isinstance(full.extra.get(), VariantB)
    assert AorB.optional is False


def test_variant_registered_after_union_may_not_declare_reserved_key() -> None:
    @dataclass(frozen=True)
    class Late:
        type: ClassVar[str] = "late"

    union = TypeField.of([Late])
    with pytest.raises(SchemaDefinitionError, match=r"variant 'late' declares reserved field: type$"):
        register(Late, field("type", types.String))
    assert union.tags == ("late",)


def test_variant_registered_after_union_decodes() -> None:
    @dataclass(frozen=True)
    class Deferred:
        type: ClassVar[str] = "deferred"

        size: float

    union = TypeField.of([Deferred])
    register(Deferred, field("size", types.Number))
    assert decode({"type": "deferred", "size": 5}, union) == Deferred(size=5)


def test_encode_of_untagged_value_is_a_mapping_error() -> None:
    @mapped(field("x", types.Number))
    @dataclass(frozen=True)
    class Plain:
        x: float

    with pytest.raises(UnknownVariantTagError, match="does not correspond to a sub-type: None") as info:
        encode(Plain(x=1), VisType)
    assert info.value.path == "object"
    assert info.value.tag is None
    assert info.value.expected == VisType.tags


def test_encode_of_non_string_tag_is_a_mapping_error() -> None:
    union = TypeField(lambda v: ["a"], [("a", VariantA)])
    with pytest.raises(UnknownVariantTagError):
        union.encode(VariantA(size=1), ROOT.extend("visualization"))
