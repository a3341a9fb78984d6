"""Struct schema model and parsing.

Type annotations form a closed union: every variant below is handled
explicitly by the mappers in `structbridge.mapping`. The wire format mirrors
the codegen schema emitted by the TurboModule type parsers, e.g.

    {"type": "ArrayTypeAnnotation", "nullable": true,
     "elementType": {"type": "TypeAliasTypeAnnotation", "name": "point"}}
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import msgpack

from .errors import SchemaError, UnrecognizedTypeKindError

logger = logging.getLogger(__name__)

ROOT_TAG = "RootTag"


@dataclass(frozen=True)
class ReservedTypeAnnotation:
    # Reserved built-in; `RootTag` is the only supported name.
    name: str
    nullable: bool = False


@dataclass(frozen=True)
class StringTypeAnnotation:
    nullable: bool = False


@dataclass(frozen=True)
class NumberTypeAnnotation:
    nullable: bool = False


@dataclass(frozen=True)
class FloatTypeAnnotation:
    nullable: bool = False


@dataclass(frozen=True)
class Int32TypeAnnotation:
    nullable: bool = False


@dataclass(frozen=True)
class DoubleTypeAnnotation:
    nullable: bool = False


@dataclass(frozen=True)
class BooleanTypeAnnotation:
    nullable: bool = False


@dataclass(frozen=True)
class GenericObjectTypeAnnotation:
    nullable: bool = False


@dataclass(frozen=True)
class ArrayTypeAnnotation:
    # None means an untyped (opaque) array.
    element_type: "StructTypeAnnotation | None" = None
    nullable: bool = False


@dataclass(frozen=True)
class TypeAliasTypeAnnotation:
    name: str
    nullable: bool = False


StructTypeAnnotation = Union[
    ReservedTypeAnnotation,
    StringTypeAnnotation,
    NumberTypeAnnotation,
    FloatTypeAnnotation,
    Int32TypeAnnotation,
    DoubleTypeAnnotation,
    BooleanTypeAnnotation,
    GenericObjectTypeAnnotation,
    ArrayTypeAnnotation,
    TypeAliasTypeAnnotation,
]


@dataclass(frozen=True)
class Property:
    name: str
    type_annotation: StructTypeAnnotation
    # Struct-level optionality, independent of `type_annotation.nullable`.
    optional: bool = False

    @classmethod
    def from_json(cls, obj: Any) -> "Property":
        if not isinstance(obj, dict):
            raise SchemaError("property must be an object")
        name = obj.get("name")
        if not isinstance(name, str) or not name:
            raise SchemaError("property is missing a name")
        optional = obj.get("optional", False)
        if not isinstance(optional, bool):
            raise SchemaError(f"property {name}: optional must be a bool")
        try:
            annotation = parse_type_annotation(obj.get("typeAnnotation"))
        except (SchemaError, UnrecognizedTypeKindError) as e:
            raise type(e)(f"property {name}: {e}") from None
        return cls(name=name, type_annotation=annotation, optional=optional)


@dataclass(frozen=True)
class Struct:
    name: str
    # Declaration order; generated accessors follow it exactly.
    properties: tuple[Property, ...]

    @classmethod
    def from_json(cls, obj: Any) -> "Struct":
        if not isinstance(obj, dict):
            raise SchemaError("struct must be an object")
        name = obj.get("name")
        if not isinstance(name, str) or not name:
            raise SchemaError("struct is missing a name")
        raw_props = obj.get("properties")
        if not isinstance(raw_props, list):
            raise SchemaError(f"struct {name}: properties must be a list")
        try:
            props = tuple(Property.from_json(p) for p in raw_props)
        except (SchemaError, UnrecognizedTypeKindError) as e:
            raise type(e)(f"struct {name}: {e}") from None
        return cls(name=name, properties=props)


@dataclass(frozen=True)
class ModuleStructs:
    module_name: str
    structs: tuple[Struct, ...]

    @classmethod
    def from_json(cls, obj: Any) -> "ModuleStructs":
        if not isinstance(obj, dict):
            raise SchemaError("module document must be an object")
        module_name = obj.get("moduleName")
        if not isinstance(module_name, str) or not module_name:
            raise SchemaError("module document is missing moduleName")
        raw_structs = obj.get("structs")
        if not isinstance(raw_structs, list):
            raise SchemaError("module document: structs must be a list")
        return cls(
            module_name=module_name,
            structs=tuple(Struct.from_json(s) for s in raw_structs),
        )

    def get(self, name: str) -> Struct | None:
        for st in self.structs:
            if st.name == name:
                return st
        return None


_SCALARS: dict[str, type] = {
    "StringTypeAnnotation": StringTypeAnnotation,
    "NumberTypeAnnotation": NumberTypeAnnotation,
    "FloatTypeAnnotation": FloatTypeAnnotation,
    "Int32TypeAnnotation": Int32TypeAnnotation,
    "DoubleTypeAnnotation": DoubleTypeAnnotation,
    "BooleanTypeAnnotation": BooleanTypeAnnotation,
    "GenericObjectTypeAnnotation": GenericObjectTypeAnnotation,
}

# Older schemas spell the reserved tag with the function-value prefix.
_RESERVED_TAGS = {"ReservedTypeAnnotation", "ReservedFunctionValueTypeAnnotation"}


def parse_type_annotation(obj: Any) -> StructTypeAnnotation:
    if not isinstance(obj, dict):
        raise SchemaError("typeAnnotation must be an object")
    tag = obj.get("type")
    if not isinstance(tag, str) or not tag:
        raise SchemaError("typeAnnotation is missing a type tag")
    nullable = obj.get("nullable", False)
    if not isinstance(nullable, bool):
        raise SchemaError(f"{tag}: nullable must be a bool")

    scalar = _SCALARS.get(tag)
    if scalar is not None:
        return scalar(nullable=nullable)

    if tag in _RESERVED_TAGS:
        name = obj.get("name")
        if not isinstance(name, str) or not name:
            raise SchemaError(f"{tag}: missing name")
        return ReservedTypeAnnotation(name=name, nullable=nullable)

    if tag == "ArrayTypeAnnotation":
        raw_elem = obj.get("elementType")
        if raw_elem is None:
            return ArrayTypeAnnotation(element_type=None, nullable=nullable)
        return ArrayTypeAnnotation(
            element_type=parse_type_annotation(raw_elem), nullable=nullable
        )

    if tag == "TypeAliasTypeAnnotation":
        name = obj.get("name")
        if not isinstance(name, str) or not name:
            raise SchemaError(f"{tag}: missing name")
        return TypeAliasTypeAnnotation(name=name, nullable=nullable)

    raise UnrecognizedTypeKindError(f"unrecognized type annotation kind: {tag}")


def load_module_structs(path: Path) -> ModuleStructs:
    """Read a module document from a `.json` or `.msgpack` file."""
    path = Path(path)
    if not path.exists():
        raise SchemaError(f"schema file not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix in {".msgpack", ".mpk"}:
            obj = msgpack.unpackb(path.read_bytes(), raw=False)
        else:
            obj = json.loads(path.read_text(encoding="utf-8"))
    except Exception as e:  # noqa: BLE001 - boundary decoding error
        raise SchemaError(f"failed to decode {path.name}: {e}") from e

    module = ModuleStructs.from_json(obj)
    logger.debug(
        "loaded %d struct(s) for module %s from %s",
        len(module.structs),
        module.module_name,
        path,
    )
    return module
