from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from .config.load import load_config
from .document.buffer import TextBuffer
from .document.parser import link_occurrences
from .editor import Editor
from .errors import InkOrgUserError
from .integration import InkscapeLinks
from .paths import resolve_link_path
from .report_schema import LinkEntry, LinksReport
from .types import INKSCAPE_SCHEME
from .version import tool_version

_LOG = logging.getLogger("inkorg")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get("INKORG_DEBUG") else logging.WARNING
    _LOG.setLevel(level)
    if not _LOG.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        _LOG.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="inkorg",
        description="Inkscape drawing links for Org documents",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--verbose", action="store_true", help="debug logging to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_links = sub.add_parser("links", help="JSON report of the links of a document")
    sp_links.add_argument("file", type=Path, help="Org document")
    sp_links.add_argument("--all", action="store_true", help="every link, not only drawing links")

    sp_export = sub.add_parser("export", help="export a document (drawing links become file links)")
    sp_export.add_argument("file", type=Path, help="Org document")
    sp_export.add_argument("--backend", default="org", help="export backend: org | html")
    sp_export.add_argument("-o", "--output", type=Path, help="output file (default: stdout)")

    sp_open = sub.add_parser("open", help="open a drawing, creating it from the template if missing")
    sp_open.add_argument("path", type=Path, help="drawing file")
    sp_open.add_argument("--wait", action="store_true", help="wait for the editor and return its exit code")

    sp_insert = sub.add_parser("insert", help="insert a link to a new drawing and open it")
    sp_insert.add_argument("file", type=Path, help="Org document (modified in place)")
    sp_insert.add_argument("--at", type=int, metavar="OFFSET", help="character offset (default: end of document)")
    sp_insert.add_argument("--name", metavar="PATH", help="drawing path instead of a generated one")

    return p


def _editor_for(path: Path) -> tuple[Editor, InkscapeLinks]:
    if not path.is_file():
        raise ValueError(f"Document not found: {path}")
    editor = Editor(TextBuffer.from_file(path))
    links = InkscapeLinks(editor).install()
    return editor, links


def _links_report(path: Path, all_links: bool) -> LinksReport:
    editor, _ = _editor_for(path)
    scheme = None if all_links else INKSCAPE_SCHEME
    entries = []
    for occ in link_occurrences(editor.parse(), scheme):
        resolved = resolve_link_path(occ.path, editor.current_buffer)
        entries.append(LinkEntry(
            scheme=occ.scheme,
            path=occ.path,
            begin=occ.begin,
            end=occ.end,
            bracketed=occ.bracketed,
            description=occ.description,
            resolved=str(resolved),
            exists=resolved.exists(),
        ))
    return LinksReport(document=str(path), scheme=scheme, links=entries, total=len(entries))


def _insert(path: Path, at: Optional[int], name: Optional[str]) -> Path:
    editor, links = _editor_for(path)
    buffer = editor.current_buffer
    buffer.goto_char(len(buffer) if at is None else at)
    if name:
        links.cfg = replace(links.cfg, ask_for_file_name=True)
    target = links.insert_link(prompt=(lambda _default: name) if name else None)
    buffer.save()
    return target


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        if ns.cmd == "links":
            report = _links_report(ns.file, ns.all)
            sys.stdout.write(json.dumps(report.model_dump(mode="json"), ensure_ascii=False, indent=2) + "\n")
            return 0

        if ns.cmd == "export":
            editor, _ = _editor_for(ns.file)
            out = editor.export(ns.backend)
            if ns.output:
                ns.output.write_text(out, encoding="utf-8")
            else:
                sys.stdout.write(out)
            return 0

        if ns.cmd == "open":
            drawing = ns.path.expanduser().resolve()
            links = InkscapeLinks(Editor(), load_config(drawing))
            launch = links.follow(str(drawing))
            if ns.wait:
                return launch.wait().returncode
            return 0

        if ns.cmd == "insert":
            target = _insert(ns.file, ns.at, ns.name)
            sys.stdout.write(f"{target}\n")
            return 0

    except InkOrgUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
