from __future__ import annotations

import logging
from dataclasses import dataclass

from .mapping import objc_type_expr, objc_value_expr
from .naming import safe_property_name
from .schema import ModuleStructs, Struct
from .templates import declaration_line, method_template, struct_template

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StructSerializationOutput:
    declaration: str
    methods: str


def serialize_regular_struct(*, module_name: str, struct: Struct) -> StructSerializationOutput:
    """Generate the accessor declarations and inline bodies for `struct`.

    Properties are emitted in declaration order. Any unsupported annotation
    aborts the whole struct with UnrecognizedTypeKindError.
    """
    decl_lines: list[str] = []
    method_blocks: list[str] = []
    for prop in struct.properties:
        prop_name = safe_property_name(prop)
        return_type = objc_type_expr(
            module_name=module_name,
            annotation=prop.type_annotation,
            optional=prop.optional,
        )
        return_value = objc_value_expr(
            module_name=module_name,
            annotation=prop.type_annotation,
            value="p",
            depth=0,
            optional=prop.optional,
        )
        decl_lines.append(declaration_line(return_type=return_type, property_name=prop_name))
        method_blocks.append(
            method_template(
                return_type=return_type,
                return_value=return_value,
                module_name=module_name,
                struct_name=struct.name,
                property_name=prop_name,
                property_key=prop.name,
            )
        )

    declaration = struct_template(
        module_name=module_name,
        struct_name=struct.name,
        struct_properties="\n      ".join(decl_lines),
    )
    logger.debug(
        "serialized struct %s.%s (%d properties)",
        module_name,
        struct.name,
        len(struct.properties),
    )
    return StructSerializationOutput(declaration=declaration, methods="\n".join(method_blocks))


def serialize_module_structs(
    *, module: ModuleStructs, module_name: str | None = None
) -> list[tuple[str, StructSerializationOutput]]:
    """Serialize every struct of `module`, in order. Segments are not combined."""
    name = module_name if module_name is not None else module.module_name
    return [
        (st.name, serialize_regular_struct(module_name=name, struct=st)) for st in module.structs
    ]
