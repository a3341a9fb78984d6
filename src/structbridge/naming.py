from __future__ import annotations

from .schema import Property

# Identifiers that cannot name a C++ member function inside an Objective-C++ TU.
_RESERVED_WORDS = frozenset(
    {
        # Objective-C
        "id",
        "self",
        "super",
        "nil",
        "Nil",
        "YES",
        "NO",
        "SEL",
        "BOOL",
        "Class",
        "IMP",
        # C++
        "auto",
        "bool",
        "break",
        "case",
        "catch",
        "char",
        "class",
        "const",
        "continue",
        "default",
        "delete",
        "do",
        "double",
        "else",
        "enum",
        "explicit",
        "export",
        "extern",
        "false",
        "float",
        "for",
        "friend",
        "goto",
        "if",
        "inline",
        "int",
        "long",
        "mutable",
        "namespace",
        "new",
        "nullptr",
        "operator",
        "private",
        "protected",
        "public",
        "register",
        "return",
        "short",
        "signed",
        "sizeof",
        "static",
        "struct",
        "switch",
        "template",
        "this",
        "throw",
        "true",
        "try",
        "typedef",
        "typename",
        "union",
        "unsigned",
        "using",
        "virtual",
        "void",
        "volatile",
        "while",
    }
)


def capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


def safe_property_name(prop: Property) -> str:
    """Return the accessor identifier for `prop`.

    Reserved words get a trailing underscore (`id` -> `id_`). The rule is not
    injective: a struct with both `id` and `id_` renders two `id_()`
    accessors. Such schemas are not rejected here.
    """
    if prop.name in _RESERVED_WORDS:
        return f"{prop.name}_"
    return prop.name


def namespaced_struct_name(module_name: str, struct_name: str) -> str:
    return f"JS::Native{module_name}::{struct_name}"


def cxx_convert_selector(module_name: str, struct_name: str) -> str:
    # RCTCxxConvert category method name for the struct.
    return f"JS_Native{module_name}_{struct_name}"
