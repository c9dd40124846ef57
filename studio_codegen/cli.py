"""
CLI for compiling studio documents to React modules.

Reads a document from a JSON file and prints (or writes) the generated code.
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .codegen import CodegenError, render_page_code
from .codegen.registries import BUILTIN_COMPONENTS
from .models.dom import NodeNotFoundError, NodeTypeError, StudioDom
from .models.render import RenderPageConfig

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def cmd_render(args) -> int:
    """Render a page of a document."""
    dom_file = Path(args.dom)
    if not dom_file.exists():
        logger.error(f"Document not found: {dom_file}")
        return 1

    try:
        dom = StudioDom.model_validate_json(dom_file.read_text())
    except ValidationError as e:
        logger.error(f"Invalid document {dom_file}: {e}")
        return 1

    config = RenderPageConfig(editor=args.editor, pretty=args.pretty)
    try:
        result = render_page_code(dom, args.page, config)
    except (CodegenError, NodeTypeError, NodeNotFoundError) as e:
        logger.error(f"Failed to render page {args.page}: {e}")
        return 1

    if args.output:
        Path(args.output).write_text(result.code)
        print(f"✅ Wrote page {args.page} to {args.output}")
    else:
        print(result.code, end="")
    return 0


def cmd_components(args) -> int:
    """List the built-in components."""
    print(f"\n{'Component':<15} {'Arguments':<50}")
    print("-" * 65)
    for name, component in BUILTIN_COMPONENTS.items():
        arguments = ", ".join(arg for arg, arg_type in component.arg_types.items() if arg_type)
        print(f"{name:<15} {arguments:<50}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compile studio pages to React modules")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Render command
    render_parser = subparsers.add_parser("render", help="Render a page to a React module")
    render_parser.add_argument("dom", help="Path to the document JSON file")
    render_parser.add_argument("--page", required=True, help="Id of the page node to render")
    render_parser.add_argument(
        "--editor", action="store_true", help="Emit editor instrumentation"
    )
    render_parser.add_argument("--pretty", action="store_true", help="Normalise the output")
    render_parser.add_argument("--output", "-o", help="Write to this file instead of stdout")

    # Components command
    subparsers.add_parser("components", help="List built-in components")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "render": cmd_render,
        "components": cmd_components,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
