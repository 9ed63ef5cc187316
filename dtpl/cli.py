from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .config import load_engine_config
from .discovery import DEFAULT_PATTERNS, find_templates
from .engine import TemplateEngine
from .errors import DtplUserError
from .preprocess import minify_html
from .template.nodes import collect_include_paths
from .template.paths import resolve_include_path
from .version import tool_version

_yaml = YAML(typ="safe")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dtpl",
        description="#{...} template engine",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="log level of diagnostics written to stderr",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--root", metavar="DIR", help="root directory of templates")
        sp.add_argument("--config", metavar="FILE", help="engine configuration (YAML)")

    sp_render = sub.add_parser("render", help="render a template to stdout")
    sp_render.add_argument("template", help="template path, relative to the root directory")
    sp_render.add_argument(
        "--data",
        metavar="FILE|-",
        help="JSON or YAML data file, or - to read it from stdin",
    )
    sp_render.add_argument("--no-escape", action="store_true", help="insert variable values as-is")
    sp_render.add_argument("--minify", action="store_true", help="minify HTML templates on load")
    sp_render.add_argument("--encoding", metavar="ENC", help="template and output encoding")
    add_common(sp_render)

    sp_check = sub.add_parser("check", help="compile templates and report errors as JSON")
    sp_check.add_argument(
        "patterns",
        nargs="*",
        metavar="PATTERN",
        help=f"gitignore-style patterns (default: {' '.join(DEFAULT_PATTERNS)})",
    )
    add_common(sp_check)

    return p


def _load_data(data_arg: Optional[str]) -> Any:
    """
    Reads template data from a file or stdin.

    JSON is tried first; anything else is parsed as YAML.
    """
    if not data_arg:
        return None

    if data_arg == "-":
        text = sys.stdin.read()
        source = "<stdin>"
    else:
        file_path = Path(data_arg)
        if not file_path.is_file():
            raise ValueError(f"Data file not found: {file_path}")
        text = file_path.read_text(encoding="utf-8")
        source = str(file_path)

    if not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    try:
        return _yaml.load(text)
    except YAMLError as e:
        raise ValueError(f"Failed to parse data from {source}: {e}") from e


def _make_engine(ns: argparse.Namespace) -> TemplateEngine:
    cfg = load_engine_config(Path(ns.config) if ns.config else None)
    engine = TemplateEngine.from_config(cfg)
    if ns.root:
        engine.root_directory = ns.root
    return engine


def _run_render(ns: argparse.Namespace) -> int:
    engine = _make_engine(ns)
    if ns.no_escape:
        engine.escape = False
    if ns.minify:
        engine.preprocessor = minify_html
    if ns.encoding:
        engine.charset = ns.encoding

    payload = engine.render_bytes(ns.template, _load_data(ns.data))
    sys.stdout.flush()
    sys.stdout.buffer.write(payload)
    sys.stdout.buffer.flush()
    return 0


def _run_check(ns: argparse.Namespace) -> int:
    engine = _make_engine(ns)
    root = Path(engine.root_directory or ".")
    if not root.is_dir():
        raise ValueError(f"Template root is not a directory: {root}")
    engine.root_directory = root.as_posix()

    templates: List[Dict[str, Any]] = []
    failed = 0
    for rel in find_templates(root, ns.patterns or None):
        entry: Dict[str, Any] = {"path": rel}
        try:
            compiled = engine.compile(rel)
        except DtplUserError as e:
            failed += 1
            entry["ok"] = False
            entry["error"] = str(e)
        else:
            entry["ok"] = True
            entry["includes"] = [
                resolve_include_path(compiled.path, target) for target in collect_include_paths(compiled)
            ]
        templates.append(entry)

    report = {
        "root": root.as_posix(),
        "checked": len(templates),
        "failed": failed,
        "templates": templates,
    }
    sys.stdout.write(json.dumps(report, ensure_ascii=False))
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, ns.log_level),
        stream=sys.stderr,
        format="[%(levelname)s] %(message)s",
    )

    try:
        if ns.cmd == "render":
            return _run_render(ns)

        if ns.cmd == "check":
            return _run_check(ns)

    except DtplUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
