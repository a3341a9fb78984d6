"""Annotation -> Objective-C++ type and value expressions.

Both mappers dispatch over the closed `StructTypeAnnotation` union and end in
`_unrecognized`, whose parameter is typed `NoReturn`: a type checker rejects
the call unless every variant was handled above it.
"""

from __future__ import annotations

from typing import NoReturn

from .errors import UnrecognizedTypeKindError
from .naming import capitalize, namespaced_struct_name
from .schema import (
    ROOT_TAG,
    ArrayTypeAnnotation,
    BooleanTypeAnnotation,
    DoubleTypeAnnotation,
    FloatTypeAnnotation,
    GenericObjectTypeAnnotation,
    Int32TypeAnnotation,
    NumberTypeAnnotation,
    ReservedTypeAnnotation,
    StringTypeAnnotation,
    StructTypeAnnotation,
    TypeAliasTypeAnnotation,
)

_NUMERIC = (
    NumberTypeAnnotation,
    FloatTypeAnnotation,
    Int32TypeAnnotation,
    DoubleTypeAnnotation,
)

_OBJECT = "id<NSObject>"
_NULLABLE_OBJECT = "id<NSObject> _Nullable"


def _is_required(annotation: StructTypeAnnotation, optional: bool) -> bool:
    return not getattr(annotation, "nullable", False) and not optional


def _unrecognized(annotation: NoReturn, *, what: str) -> NoReturn:
    kind = type(annotation).__name__
    raise UnrecognizedTypeKindError(f"couldn't convert into ObjC {what}: {kind}")


def _reserved_unrecognized(annotation: ReservedTypeAnnotation) -> NoReturn:
    raise UnrecognizedTypeKindError(f"unrecognized reserved type: {annotation.name}")


def alias_struct_name(module_name: str, annotation: TypeAliasTypeAnnotation) -> str:
    return namespaced_struct_name(module_name, capitalize(annotation.name))


def objc_type_expr(
    *, module_name: str, annotation: StructTypeAnnotation, optional: bool = False
) -> str:
    """Return the C++ return type for a value described by `annotation`.

    `optional` is the struct-level optional flag of the owning property; array
    elements are always mapped with `optional=False`.
    """
    is_required = _is_required(annotation, optional)

    def wrap_optional(t: str) -> str:
        return t if is_required else f"folly::Optional<{t}>"

    if isinstance(annotation, ReservedTypeAnnotation):
        if annotation.name == ROOT_TAG:
            return wrap_optional("double")
        _reserved_unrecognized(annotation)
    if isinstance(annotation, StringTypeAnnotation):
        # NSString * is already nullable.
        return "NSString *"
    if isinstance(annotation, _NUMERIC):
        return wrap_optional("double")
    if isinstance(annotation, BooleanTypeAnnotation):
        return wrap_optional("bool")
    if isinstance(annotation, GenericObjectTypeAnnotation):
        return _OBJECT if is_required else _NULLABLE_OBJECT
    if isinstance(annotation, ArrayTypeAnnotation):
        if annotation.element_type is None:
            return _OBJECT if is_required else _NULLABLE_OBJECT
        elem = objc_type_expr(module_name=module_name, annotation=annotation.element_type)
        return wrap_optional(f"facebook::react::LazyVector<{elem}>")
    if isinstance(annotation, TypeAliasTypeAnnotation):
        return wrap_optional(alias_struct_name(module_name, annotation))
    _unrecognized(annotation, what="type")


def objc_value_expr(
    *,
    module_name: str,
    annotation: StructTypeAnnotation,
    value: str,
    depth: int,
    optional: bool = False,
) -> str:
    """Return an expression converting the `id` held in `value` to the mapped type.

    `depth` names the closure argument of nested array conversions
    (`itemValue_<depth>`), so it must grow by one per array level.
    """
    is_required = _is_required(annotation, optional)

    def bridging_to(kind: str, arg: str | None = None) -> str:
        args = ", ".join(a for a in (value, arg) if a)
        if is_required:
            return f"RCTBridgingTo{kind}({args})"
        return f"RCTBridgingToOptional{kind}({args})"

    if isinstance(annotation, ReservedTypeAnnotation):
        if annotation.name == ROOT_TAG:
            return bridging_to("Double")
        _reserved_unrecognized(annotation)
    if isinstance(annotation, StringTypeAnnotation):
        return bridging_to("String")
    if isinstance(annotation, _NUMERIC):
        return bridging_to("Double")
    if isinstance(annotation, BooleanTypeAnnotation):
        return bridging_to("Bool")
    if isinstance(annotation, GenericObjectTypeAnnotation):
        return value
    if isinstance(annotation, ArrayTypeAnnotation):
        elem = annotation.element_type
        if elem is None:
            return value
        local_var = f"itemValue_{depth}"
        elem_type = objc_type_expr(module_name=module_name, annotation=elem)
        elem_value = objc_value_expr(
            module_name=module_name,
            annotation=elem,
            value=local_var,
            depth=depth + 1,
        )
        return bridging_to("Vec", f"^{elem_type}(id {local_var}) {{ return {elem_value}; }}")
    if isinstance(annotation, TypeAliasTypeAnnotation):
        name = alias_struct_name(module_name, annotation)
        if is_required:
            return f"{name}({value})"
        return f"({value} == nil ? folly::none : folly::make_optional({name}({value})))"
    _unrecognized(annotation, what="value")
