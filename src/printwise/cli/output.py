"""Output formatting for the Printwise CLI.

Provides both JSON (machine-parseable) and human-readable (Rich) output.
All public functions accept a ``json_mode`` flag:
    - ``True``  → JSON string ready for agent consumption
    - ``False`` → Rich-formatted text for humans
"""

from __future__ import annotations

import json
from io import StringIO
from typing import Any, Dict, List, Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


def _render(renderable: Any) -> str:
    """Render a Rich object to a string."""
    buf = StringIO()
    console = Console(file=buf, force_terminal=True, width=100, highlight=False)
    console.print(renderable)
    return buf.getvalue().rstrip("\n")


def _dump(envelope: Dict[str, Any]) -> str:
    return json.dumps(envelope, indent=2, sort_keys=False, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


def format_response(
    status: str,
    data: Optional[Dict[str, Any]] = None,
    error: Optional[Dict[str, Any]] = None,
    *,
    json_mode: bool = False,
) -> str:
    """Build a standard ``{status, data, error}`` response."""
    if json_mode:
        return _dump({"status": status, "data": data, "error": error})

    if status == "error" and error:
        code = error.get("code", "UNKNOWN")
        msg = error.get("message", "An unknown error occurred.")
        t = Text()
        t.append("Error", style="bold red")
        t.append(f" [{code}]: ", style="red")
        t.append(msg)
        return _render(Panel(t, title="Error", border_style="red"))

    if data:
        lines = [f"[bold]{k}:[/bold] {v}" for k, v in data.items()]
        return _render(Panel("\n".join(lines), border_style="green"))

    return f"Status: {status}"


def format_error(
    message: str,
    code: str = "INTERNAL_ERROR",
    *,
    json_mode: bool = False,
) -> str:
    """Shortcut for a standard error response."""
    return format_response(
        "error",
        error={"code": code, "message": message},
        json_mode=json_mode,
    )


# ---------------------------------------------------------------------------
# Recommendation
# ---------------------------------------------------------------------------


def _material_panel(material: Dict[str, Any]) -> Panel:
    stats = Table(show_header=False, box=None, padding=(0, 2))
    stats.add_column("Key", style="bold cyan", no_wrap=True)
    stats.add_column("Value")
    stats.add_row("Strength", f"{material['strength']}/10")
    stats.add_row("Flexibility", f"{material['flexibility']}/10")
    stats.add_row("Ease", f"{material['ease']}/10")
    stats.add_row("Temp", material["temperature_range"]["label"])
    stats.add_row("Best for", ", ".join(material["best_for"]))

    header = Text()
    header.append(material["name"], style="bold green")
    header.append("\n")
    header.append(material["description"], style="italic")
    return Panel(
        Group(header, Text(""), stats),
        title="Recommended Filament",
        border_style="green",
    )


def _settings_table(settings: Dict[str, Any]) -> Table:
    table = Table(title="Print Settings", border_style="blue")
    table.add_column("Setting", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Nozzle Temp", f"{settings['nozzle_temperature']}°C")
    table.add_row("Bed Temp", f"{settings['bed_temperature']}°C")
    table.add_row("Layer Height", f"{settings['layer_height']:.2f} mm")
    table.add_row("Print Speed", settings["print_speed"])
    table.add_row("Infill", settings["infill_percent"])
    return table


def _candidates_table(candidates: List[Dict[str, Any]], chosen_id: str) -> Table:
    table = Table(title="Candidate Scores", border_style="blue")
    table.add_column("Material", style="bold")
    table.add_column("Score", justify="right")
    for c in candidates:
        marker = " *" if c["material"] == chosen_id else ""
        table.add_row(f"{c['material']}{marker}", f"{c['score']:.1f}")
    return table


def format_recommendation(
    project: str,
    recommendation: Dict[str, Any],
    candidates: Optional[List[Dict[str, Any]]] = None,
    *,
    json_mode: bool = False,
) -> str:
    """Format a recommendation for display.

    Expects the dict from ``Recommendation.to_dict()`` and, when the
    candidate breakdown was requested, dicts from
    ``CandidateScore.to_dict()``.
    """
    if json_mode:
        data: Dict[str, Any] = {"project": project, **recommendation}
        if candidates is not None:
            data["candidates"] = candidates
        return _dump({"status": "success", "data": data, "error": None})

    material = recommendation["chosen_material"]
    parts: List[Any] = [
        Text(f"Project: {project}", style="bold"),
        _material_panel(material),
        _settings_table(recommendation["settings"]),
    ]
    if candidates is not None:
        parts.append(_candidates_table(candidates, material["id"]))
    return _render(Group(*parts))


# ---------------------------------------------------------------------------
# Catalog listing
# ---------------------------------------------------------------------------


def format_materials(
    materials: List[Dict[str, Any]],
    *,
    json_mode: bool = False,
) -> str:
    """Format the material catalog.

    Expects dicts from ``MaterialProfile.to_dict()``.
    """
    if json_mode:
        return _dump(
            {
                "status": "success",
                "data": {"materials": materials, "count": len(materials)},
                "error": None,
            }
        )

    table = Table(title="Materials", border_style="blue")
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Strength", justify="right")
    table.add_column("Flexibility", justify="right")
    table.add_column("Ease", justify="right")
    table.add_column("Temp", no_wrap=True)
    table.add_column("Best for")
    for m in materials:
        table.add_row(
            m["name"],
            str(m["strength"]),
            str(m["flexibility"]),
            str(m["ease"]),
            m["temperature_range"]["label"],
            ", ".join(m["best_for"]),
        )
    return _render(table)
