"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). Renderers are
dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from mdnest.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from mdnest.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    path = result.data.get("path")
    return str(path) if path else f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="mdn.ok"), Text(f"  {result.op}", style="mdn.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="mdn.key")
    if isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":"), ensure_ascii=False))
    elif key in ("path", "root"):
        v = Text(str(value), style="mdn.path")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the telemetry span tree (verbose only)."""
    telemetry = (result.meta or {}).get("telemetry")
    if not telemetry:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    _render_span(console, telemetry, indent=4)


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    line = Text(" " * indent)
    line.append(f"{span.get('duration_ms', 0.0):>8.2f}ms", style="dim")
    line.append(f"  {span.get('name', '?')}")
    annotations = span.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


def _human_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} B"


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="mdn.error"), Text(f"  {result.op}", style="mdn.op"), Text(" — "), msg
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Tree ──────────────────────────────────────────────────────────────


def _add_branch(parent: Tree, node: dict[str, Any]) -> None:
    if node["is_dir"]:
        branch = parent.add(Text(f"{node['name']}/", style="mdn.dir"))
        for child in node.get("children") or []:
            _add_branch(branch, child)
    else:
        label = Text(node["name"], style="mdn.file")
        label.append(f"  {_human_size(node.get('size') or 0)}", style="mdn.size")
        parent.add(label)


def _render_tree(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    node = data["tree"]
    root = Tree(Text(node["path"], style="mdn.dir"))
    for child in node.get("children") or []:
        _add_branch(root, child)
    console.print(root)

    summary = f"{data['node_count']} nodes"
    if data.get("truncated"):
        summary += f" (truncated at {data['max_nodes']})"
    console.print(Text(summary, style="dim"))


# ── Frontmatter ───────────────────────────────────────────────────────


def _render_schema(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    fields = result.data.get("fields", [])
    if not fields:
        console.print(Text("  (no fields)", style="dim"))
        return
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Key", justify="right", style="mdn.count")
    table.add_column("Title")
    table.add_column("Type", style="mdn.key")
    for field in fields:
        table.add_row(str(field["key"]), field["title"], field["field_type"])
    console.print(table)


def _render_suggestions(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    if "field" in data:
        by_field = {data["field"]: data["suggestions"]}
    else:
        by_field = data.get("field_suggestions", {})
    if not by_field:
        console.print(Text("  (no suggestions)", style="dim"))
        return

    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Field")
    table.add_column("Value")
    table.add_column("Count", justify="right", style="mdn.count")
    for title, suggestions in by_field.items():
        for i, suggestion in enumerate(suggestions):
            table.add_row(title if i == 0 else "", suggestion["value"], str(suggestion["count"]))
    console.print(table)


def _render_form(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    data = result.data
    _field(console, "path", data["path"])
    console.print(Text("  values:", style="mdn.key"))
    for key, value in data["values"].items():
        _field(console, f"  {key}", value if value is not None else "—")
    if verbose:
        _field(console, "metadata", data["metadata"])


# ── Generic renderer ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "build_tree": _render_tree,
    "load_schema": _render_schema,
    "save_schema": _render_schema,
    "load_suggestions": _render_suggestions,
    "read_form": _render_form,
}
