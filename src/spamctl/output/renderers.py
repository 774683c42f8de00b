"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from spamctl.output.console import create_console, get_output, style_for_change, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from spamctl.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console"], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console)
    else:
        _render_error(result, console, verbose=verbose)
    if verbose:
        _render_meta(console, result)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: one name per line, or the status line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list) and items:
        return "\n".join(str(item) for item in items)
    filters = result.data.get("filters")
    if isinstance(filters, list) and filters:
        return "\n".join(f"{f['name']}\t{f['status']}" for f in filters)
    if "status" in result.data:
        return str(result.data["status"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="spam.ok"), Text(f"  {result.op}", style="spam.op"))


def _field(console: Console, key: str, value: Any, style: str = "") -> None:
    console.print(Text(f"  {key}: ", style="spam.key"), Text(str(value), style=style))


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    telemetry = result.meta.get("telemetry")
    if telemetry:
        console.print(Text("  timing:", style="dim"))
        _render_span(console, telemetry, indent=4)


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    annotations = span.get("annotations") or {}
    extra = "  " + ", ".join(f"{k}={v}" for k, v in annotations.items()) if annotations else ""
    console.print(f"{' ' * indent}{span.get('duration_ms', 0.0):>8.2f}ms  {span.get('name')}{extra}")
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text("ERROR", style="spam.error"), Text(f"  {result.op}", style="spam.op"), " — ", msg)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Filter renderers ──────────────────────────────────────────────────


def _render_filter_status(result: ServiceResult, console: Console) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "account", d.get("account_id", ""), "spam.id")
    _field(console, "status", d.get("status", ""), style_for_status(str(d.get("status", ""))))
    installation = d.get("installation", {})
    _field(
        console,
        "installed",
        f"{installation.get('percent', 0)}% "
        f"({installation.get('up_to_date', 0)}/{installation.get('total', 0)} filters up to date)",
    )
    coverage = d.get("coverage", {})
    _field(
        console,
        "coverage",
        f"{coverage.get('percent', 0)}% "
        f"({coverage.get('domains_covered', 0)}/{coverage.get('total_domains', 0)} domains)",
    )

    filters = d.get("filters", [])
    if filters:
        table = Table(show_header=True, pad_edge=False)
        table.add_column("Filter", style="spam.name")
        table.add_column("ID", style="spam.id")
        table.add_column("Status")
        for item in filters:
            status = str(item.get("status", ""))
            table.add_row(
                str(item.get("name", "")),
                str(item.get("id") or "—"),
                Text(status, style=style_for_status(status)),
            )
        console.print(table)


def _render_update_filters(result: ServiceResult, console: Console) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "account", d.get("account_id", ""), "spam.id")
    for key in ("created", "updated", "removed", "unchanged"):
        _field(console, key, d.get(key, 0))
    for change in d.get("changes", []):
        console.print(f"    {change['action']:<8} {change['name']}")


def _render_remove_filters(result: ServiceResult, console: Console) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "account", d.get("account_id", ""), "spam.id")
    _field(console, "removed", d.get("removed", 0))
    for name in d.get("items", []):
        console.print(f"    {name}")


def _render_global_status(result: ServiceResult, console: Console) -> None:
    d = result.data
    _status_line(console, result)
    status = str(d.get("status", ""))
    _field(console, "status", status, style_for_status(status))
    table = Table(show_header=True, pad_edge=False)
    table.add_column("Account", style="spam.id")
    table.add_column("Status")
    table.add_column("Installed", justify="right")
    for account in d.get("accounts", []):
        account_status = str(account.get("status", ""))
        table.add_row(
            str(account.get("account_id", "")),
            Text(account_status, style=style_for_status(account_status)),
            f"{account.get('percent', 0)}%",
        )
    console.print(table)


# ── Domain renderers ──────────────────────────────────────────────────


def _render_update_domains(result: ServiceResult, console: Console) -> None:
    d = result.data
    _status_line(console, result)
    for key, value in d.get("statistics", {}).items():
        _field(console, key, value)
    for row in d.get("domains", []):
        change = row.get("change", "")
        if change == "unchanged":
            continue
        marker = "+" if change == "added" else "-"
        console.print(Text(f"    {marker} {row.get('domain', '')}", style=style_for_change(change)))


def _render_domain_list(result: ServiceResult, console: Console) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "count", d.get("count", 0))
    for name in d.get("items", []):
        console.print(f"    {name}")


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Renderer] = {
    "filter_status": _render_filter_status,
    "update_filters": _render_update_filters,
    "remove_filters": _render_remove_filters,
    "global_status": _render_global_status,
    "update_domains": _render_update_domains,
    "list_domains": _render_domain_list,
    "add_domains": _render_domain_list,
}
