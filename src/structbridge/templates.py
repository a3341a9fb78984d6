from __future__ import annotations

from .naming import cxx_convert_selector, namespaced_struct_name


def _padded(return_type: str) -> str:
    # Pointer types bind to the name: `NSString *title()`.
    return return_type if return_type.endswith("*") else f"{return_type} "


def declaration_line(*, return_type: str, property_name: str) -> str:
    return f"{_padded(return_type)}{property_name}() const;"


def struct_template(*, module_name: str, struct_name: str, struct_properties: str) -> str:
    """Render the struct declaration and its RCTCxxConvert category."""
    selector = cxx_convert_selector(module_name, struct_name)
    return "\n".join(
        [
            "",
            "namespace JS {",
            f"  namespace Native{module_name} {{",
            f"    struct {struct_name} {{",
            f"      {struct_properties}",
            "",
            f"      {struct_name}(NSDictionary *const v) : _v(v) {{}}",
            "    private:",
            "      NSDictionary *_v;",
            "    };",
            "  }",
            "}",
            "",
            f"@interface RCTCxxConvert (Native{module_name}_{struct_name})",
            f"+ (RCTManagedPointer *){selector}:(id)json;",
            "@end",
            "",
        ]
    )


def method_template(
    *,
    return_type: str,
    return_value: str,
    module_name: str,
    struct_name: str,
    property_name: str,
    property_key: str,
) -> str:
    """Render one inline accessor.

    `property_name` is the (reserved-word safe) accessor name, `property_key`
    the dictionary key the value is read from.
    """
    owner = namespaced_struct_name(module_name, struct_name)
    return "\n".join(
        [
            "",
            f"inline {_padded(return_type)}{owner}::{property_name}() const",
            "{",
            f'  id const p = _v[@"{property_key}"];',
            f"  return {return_value};",
            "}",
            "",
        ]
    )
