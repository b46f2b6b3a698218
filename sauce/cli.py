from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .config import TemplateOptions, load_options
from .diagnostics import setup_logging, stderr_sink
from .engine import Template
from .errors import SauceUserError
from .version import tool_version

_yaml = YAML(typ="safe")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sauce",
        description="Sauce template engine",
        add_help=True,
    )
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Arguments shared by render/tree
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("template", help="template file")
        sp.add_argument("--config", metavar="FILE", help="YAML options file")
        sp.add_argument(
            "--no-trim",
            action="store_true",
            help="keep whitespace around control tags",
        )
        sp.add_argument("--begin", metavar="STR", help="tag begin marker (default '{%%')")
        sp.add_argument("--end", metavar="STR", help="tag end marker (default '%%}')")
        sp.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")

    sp_render = sub.add_parser("render", help="render a template to stdout")
    add_common(sp_render)
    sp_render.add_argument(
        "--data",
        metavar="FILE|-",
        help="model as a YAML or JSON file, or - for stdin",
    )

    sp_tree = sub.add_parser("tree", help="print the parsed syntax tree")
    add_common(sp_tree)
    sp_tree.add_argument("--contents", action="store_true", help="show node contents")

    return p


def _options(ns: argparse.Namespace) -> TemplateOptions:
    opts = load_options(Path(ns.config)) if ns.config else TemplateOptions()
    if ns.begin:
        opts.begin_marker = ns.begin
    if ns.end:
        opts.end_marker = ns.end
    if ns.no_trim:
        opts.trimming = False
    return opts


def _load_model(data_arg: Optional[str]) -> Any:
    """
    Reads the model for --data.

    JSON is a subset of YAML, so one loader serves both formats.
    """
    if not data_arg:
        return None

    if data_arg == "-":
        text = sys.stdin.read()
        origin = "stdin"
    else:
        path = Path(data_arg)
        if not path.is_file():
            raise SauceUserError(f"Data file not found: {path}")
        text = path.read_text(encoding="utf-8")
        origin = str(path)

    try:
        return _yaml.load(text)
    except YAMLError as e:
        raise SauceUserError(f"Failed to parse data from {origin}: {e}") from e


def _load_template(ns: argparse.Namespace) -> Template:
    path = Path(ns.template)
    if not path.is_file():
        raise SauceUserError(f"Template file not found: {path}")
    # Debug tags go to stderr so that stdout carries only the rendered text
    return Template.from_file(path, options=_options(ns), debug_sink=stderr_sink)


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    setup_logging(verbose=ns.verbose)

    try:
        if ns.cmd == "render":
            template = _load_template(ns)
            sys.stdout.write(template.render(_load_model(ns.data)))
            return 0

        if ns.cmd == "tree":
            template = _load_template(ns)
            sys.stdout.write(template.format_tree(contents=ns.contents) + "\n")
            return 0

    except SauceUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
