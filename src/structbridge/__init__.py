"""structbridge: generate Objective-C++ accessors for TurboModule structs."""

from __future__ import annotations

from . import errors
from .mapping import objc_type_expr, objc_value_expr
from .schema import ModuleStructs, Property, Struct, load_module_structs
from .serializer import StructSerializationOutput, serialize_module_structs, serialize_regular_struct

__all__ = [
    "ModuleStructs",
    "Property",
    "Struct",
    "StructSerializationOutput",
    "errors",
    "load_module_structs",
    "objc_type_expr",
    "objc_value_expr",
    "serialize_module_structs",
    "serialize_regular_struct",
]
