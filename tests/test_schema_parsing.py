from __future__ import annotations

import json
from pathlib import Path

import msgpack
import pytest

from structbridge.errors import SchemaError, UnrecognizedTypeKindError
from structbridge.schema import (
    ArrayTypeAnnotation,
    DoubleTypeAnnotation,
    GenericObjectTypeAnnotation,
    ModuleStructs,
    Property,
    ReservedTypeAnnotation,
    StringTypeAnnotation,
    Struct,
    TypeAliasTypeAnnotation,
    load_module_structs,
    parse_type_annotation,
)

GEOMETRY = {
    "moduleName": "Geometry",
    "structs": [
        {
            "name": "Point",
            "properties": [
                {"name": "x", "optional": False, "typeAnnotation": {"type": "DoubleTypeAnnotation"}},
                {"name": "y", "optional": True, "typeAnnotation": {"type": "DoubleTypeAnnotation"}},
            ],
        },
        {
            "name": "Polygon",
            "properties": [
                {
                    "name": "vertices",
                    "typeAnnotation": {
                        "type": "ArrayTypeAnnotation",
                        "nullable": True,
                        "elementType": {"type": "TypeAliasTypeAnnotation", "name": "point"},
                    },
                },
                {
                    "name": "rootTag",
                    "typeAnnotation": {"type": "ReservedFunctionValueTypeAnnotation", "name": "RootTag"},
                },
            ],
        },
    ],
}


def test_parse_type_annotation_variants():
    assert parse_type_annotation({"type": "StringTypeAnnotation", "nullable": True}) == (
        StringTypeAnnotation(nullable=True)
    )
    assert parse_type_annotation({"type": "GenericObjectTypeAnnotation"}) == GenericObjectTypeAnnotation()
    assert parse_type_annotation({"type": "ArrayTypeAnnotation"}) == ArrayTypeAnnotation()
    assert parse_type_annotation(
        {"type": "ArrayTypeAnnotation", "elementType": {"type": "DoubleTypeAnnotation"}}
    ) == ArrayTypeAnnotation(element_type=DoubleTypeAnnotation())
    assert parse_type_annotation({"type": "ReservedTypeAnnotation", "name": "RootTag"}) == (
        ReservedTypeAnnotation(name="RootTag")
    )


def test_parse_rejects_unknown_tags():
    with pytest.raises(UnrecognizedTypeKindError, match=r"MixedTypeAnnotation"):
        parse_type_annotation({"type": "MixedTypeAnnotation"})
    with pytest.raises(UnrecognizedTypeKindError):
        parse_type_annotation(
            {"type": "ArrayTypeAnnotation", "elementType": {"type": "FunctionTypeAnnotation"}}
        )


def test_parse_rejects_malformed_annotations():
    with pytest.raises(SchemaError, match=r"must be an object"):
        parse_type_annotation("DoubleTypeAnnotation")
    with pytest.raises(SchemaError, match=r"missing a type tag"):
        parse_type_annotation({"nullable": True})
    with pytest.raises(SchemaError, match=r"nullable must be a bool"):
        parse_type_annotation({"type": "DoubleTypeAnnotation", "nullable": "yes"})
    with pytest.raises(SchemaError, match=r"missing name"):
        parse_type_annotation({"type": "TypeAliasTypeAnnotation"})


def test_struct_from_json_keeps_property_order():
    st = Struct.from_json(GEOMETRY["structs"][0])
    assert st == Struct(
        name="Point",
        properties=(
            Property(name="x", type_annotation=DoubleTypeAnnotation()),
            Property(name="y", type_annotation=DoubleTypeAnnotation(), optional=True),
        ),
    )


def test_struct_errors_name_the_offending_property():
    with pytest.raises(SchemaError, match=r"struct Point: property x: typeAnnotation must be an object"):
        Struct.from_json({"name": "Point", "properties": [{"name": "x"}]})
    with pytest.raises(SchemaError, match=r"optional must be a bool"):
        Property.from_json({"name": "x", "optional": 1, "typeAnnotation": {"type": "DoubleTypeAnnotation"}})


def test_module_structs_from_json():
    module = ModuleStructs.from_json(GEOMETRY)
    assert module.module_name == "Geometry"
    assert [s.name for s in module.structs] == ["Point", "Polygon"]
    polygon = module.get("Polygon")
    assert polygon is not None
    assert polygon.properties[0].type_annotation == ArrayTypeAnnotation(
        element_type=TypeAliasTypeAnnotation(name="point"), nullable=True
    )
    assert polygon.properties[1].type_annotation == ReservedTypeAnnotation(name="RootTag")
    assert module.get("Missing") is None


def test_load_module_structs_json_and_msgpack(tmp_path: Path):
    json_path = tmp_path / "geometry.json"
    json_path.write_text(json.dumps(GEOMETRY), encoding="utf-8")
    mp_path = tmp_path / "geometry.msgpack"
    mp_path.write_bytes(msgpack.packb(GEOMETRY, use_bin_type=True))

    assert load_module_structs(json_path) == load_module_structs(mp_path)


def test_load_module_structs_errors(tmp_path: Path):
    with pytest.raises(SchemaError, match=r"not found"):
        load_module_structs(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(SchemaError, match=r"failed to decode bad.json"):
        load_module_structs(bad)

    no_name = tmp_path / "noname.json"
    no_name.write_text(json.dumps({"structs": []}), encoding="utf-8")
    with pytest.raises(SchemaError, match=r"moduleName"):
        load_module_structs(no_name)


def test_unrecognized_tag_names_struct_and_property():
    doc = {
        "moduleName": "Geometry",
        "structs": [
            GEOMETRY["structs"][0],
            {
                "name": "Shape",
                "properties": [
                    {"name": "onTap", "typeAnnotation": {"type": "FunctionTypeAnnotation"}},
                ],
            },
        ],
    }
    with pytest.raises(
        UnrecognizedTypeKindError,
        match=r"^struct Shape: property onTap: unrecognized type annotation kind: FunctionTypeAnnotation$",
    ):
        ModuleStructs.from_json(doc)
