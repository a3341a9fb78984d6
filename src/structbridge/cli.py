from __future__ import annotations

import argparse
import importlib.metadata
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from .errors import StructBridgeError


def default_log_level() -> str:
    """Return the default log level name.

    Override with `STRUCTBRIDGE_LOG_LEVEL`.
    """
    return (os.environ.get("STRUCTBRIDGE_LOG_LEVEL") or "WARNING").upper()


@dataclass(frozen=True)
class GenOptions:
    schema: Path
    module_name: str | None = None
    struct: str | None = None
    out: Path | None = None


def run_gen(opts: GenOptions) -> str:
    """Serialize the structs of a schema document and return the generated text."""
    from .schema import load_module_structs
    from .serializer import serialize_module_structs, serialize_regular_struct

    module = load_module_structs(opts.schema)
    module_name = opts.module_name if opts.module_name is not None else module.module_name
    if opts.struct is not None:
        st = module.get(opts.struct)
        if st is None:
            raise StructBridgeError(f"struct {opts.struct} not found in {module.module_name}")
        outputs = [(st.name, serialize_regular_struct(module_name=module_name, struct=st))]
    else:
        outputs = serialize_module_structs(module=module, module_name=module_name)

    chunks = [f"{out.declaration}\n{out.methods}" for _name, out in outputs]
    text = "\n".join(chunks)
    if opts.out is not None:
        opts.out.parent.mkdir(parents=True, exist_ok=True)
        opts.out.write_text(text, encoding="utf-8")
    return text


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="structbridge")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: STRUCTBRIDGE_LOG_LEVEL or WARNING).",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version", help="Print structbridge version.")

    p_gen = sub.add_parser(
        "gen",
        help="Generate Objective-C++ struct accessors from a module schema document.",
    )
    p_gen.add_argument("--schema", required=True, help="Module schema document (.json or .msgpack).")
    p_gen.add_argument("--module", default=None, help="Module name override (default: the document's moduleName).")
    p_gen.add_argument("--struct", default=None, help="Only generate this struct.")
    p_gen.add_argument("--out", default=None, help="Output file path (default: stdout).")

    args = parser.parse_args(argv)
    level = (args.log_level or default_log_level()).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise SystemExit(f"structbridge: unknown log level {level}")
    logging.basicConfig(level=level)

    if args.cmd == "version":
        try:
            print(importlib.metadata.version("structbridge"))
        except importlib.metadata.PackageNotFoundError:
            print("0.0.0")
        return

    if args.cmd == "gen":
        opts = GenOptions(
            schema=Path(args.schema),
            module_name=args.module,
            struct=args.struct,
            out=Path(args.out) if args.out else None,
        )
        try:
            text = run_gen(opts)
        except StructBridgeError as e:
            raise SystemExit(f"structbridge: {e}") from None
        if opts.out is None:
            sys.stdout.write(text)
        return
