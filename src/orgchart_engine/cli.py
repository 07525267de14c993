"""CLI entry point for the org chart engine."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from orgchart_engine.config import EngineConfig, TeamDepth, load_config
from orgchart_engine.exceptions import OrgChartError
from orgchart_engine.records import RecordSet, load_records

if TYPE_CHECKING:
    from orgchart_engine.models.person import Person

app = typer.Typer(
    name="orgchart",
    help="Org chart engine: reporting hierarchy and survey access policy.",
    no_args_is_help=True,
)
console = Console()

_LEVEL_COLORS = {"edit": "green", "view": "yellow", "none": "dim"}


def _load(records: Path) -> RecordSet:
    try:
        return load_records(records)
    except OrgChartError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e


def _config(
    path: Path | None,
    team: bool | None = None,
    depth: TeamDepth | None = None,
) -> EngineConfig:
    try:
        config = load_config(path)
    except OrgChartError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e
    overrides: dict = {}
    if team is not None:
        overrides["show_only_team"] = team
    if depth is not None:
        overrides["team_depth"] = depth
    return config.model_copy(update=overrides)


def _add_branch(node: Tree, person: Person) -> None:
    label = f"[bold]{person.name or person.id}[/bold]"
    if person.position:
        label += f" [dim]· {person.position}[/dim]"
    branch = node.add(label)
    for child in person.children:
        _add_branch(branch, child)


@app.command()
def tree(
    records: Path = typer.Argument(help="JSON or YAML record file"),
    user: str | None = typer.Option(None, help="Viewer identity token (ag_userid or person id)"),
    team: bool | None = typer.Option(None, "--team/--all", help="Show only the viewer's team"),
    depth: TeamDepth | None = typer.Option(None, help="Team view depth: direct or full"),
    config: Path | None = typer.Option(None, help="YAML config file"),
) -> None:
    """Print the reporting hierarchy as seen by a viewer."""
    from orgchart_engine.hierarchy.builder import build_hierarchy
    from orgchart_engine.hierarchy.scope import build_view
    from orgchart_engine.identity.normalizer import GuidCache

    cfg = _config(config, team, depth)
    data = _load(records)
    hierarchy = build_hierarchy(data.people)
    forest = build_view(hierarchy, user, cfg, GuidCache(cfg.guid_cache_size))

    if not forest:
        console.print("[dim]Nothing to show.[/dim]")
        return

    root = Tree("[bold]Organization[/bold]")
    for person in forest:
        _add_branch(root, person)
    console.print(root)


@app.command()
def access(
    records: Path = typer.Argument(help="JSON or YAML record file"),
    user: str = typer.Option(..., help="Viewer identity token (ag_userid or person id)"),
    survey: str = typer.Option(..., help="Survey id (msfp_surveyid)"),
    config: Path | None = typer.Option(None, help="YAML config file"),
) -> None:
    """Show the access verdict for every person for one survey."""
    from orgchart_engine.access.policy import decide, has_response
    from orgchart_engine.access.stage import detect_stage
    from orgchart_engine.hierarchy.scope import build_user_context
    from orgchart_engine.identity.normalizer import GuidCache

    cfg = _config(config)
    data = _load(records)
    selected = data.survey_by_id(survey)
    if selected is None:
        console.print(f"[red]Unknown survey {survey}[/red]")
        raise typer.Exit(1)

    context = build_user_context(user, data.people, cache=GuidCache(cfg.guid_cache_size))
    if not context.is_resolved:
        console.print(f"[yellow]No person matches user {user}; everything is hidden.[/yellow]")

    stage = detect_stage(selected.name)
    table = Table(title=f"{selected.name} (stage {stage.value if stage else '1, unmarked'})")
    table.add_column("Person")
    table.add_column("Access", no_wrap=True)
    table.add_column("Reason", no_wrap=True)
    table.add_column("Chain", no_wrap=True)

    for person in data.people:
        result = decide(
            stage,
            person.id,
            context,
            has_response(data.responses, person.id, selected.id),
            data.responses,
            data.surveys,
            person.email,
            blue_collar_domain=cfg.blue_collar_domain,
        )
        color = _LEVEL_COLORS[result.access_level.value]
        table.add_row(
            person.name or person.id,
            f"[{color}]{result.access_level.value}[/{color}]",
            result.reason.value,
            "blocked" if result.is_chain_blocked else "",
        )
    console.print(table)


@app.command()
def pending(
    records: Path = typer.Argument(help="JSON or YAML record file"),
    user: str = typer.Option(..., help="Viewer identity token (ag_userid or person id)"),
    config: Path | None = typer.Option(None, help="YAML config file"),
) -> None:
    """Count surveys the viewer can fill in right now, per survey."""
    from orgchart_engine.access.pending import pending_targets
    from orgchart_engine.hierarchy.scope import build_user_context
    from orgchart_engine.identity.normalizer import GuidCache

    cfg = _config(config)
    data = _load(records)
    context = build_user_context(user, data.people, cache=GuidCache(cfg.guid_cache_size))

    if not data.surveys:
        console.print("[dim]No surveys found.[/dim]")
        return

    for survey in data.surveys:
        targets = pending_targets(
            survey,
            context,
            data.people,
            data.responses,
            data.surveys,
            blue_collar_domain=cfg.blue_collar_domain,
        )
        color = "green" if targets else "dim"
        console.print(f"[{color}]{len(targets):>3}[/{color}] {survey.name or survey.id}")
        for person in targets:
            console.print(f"      [dim]{person.name or person.id}[/dim]")


@app.command()
def validate(
    records: Path = typer.Argument(help="JSON or YAML record file"),
) -> None:
    """Report manager cycles and people whose manager is missing."""
    from orgchart_engine.hierarchy.builder import find_orphans, validate_hierarchy_for_cycles

    data = _load(records)
    console.print(
        f"[bold]{len(data.people)}[/bold] people, "
        f"[bold]{len(data.surveys)}[/bold] surveys, "
        f"[bold]{len(data.responses)}[/bold] responses"
    )

    if validate_hierarchy_for_cycles(data.people):
        console.print("[green]No manager cycles[/green]")
    else:
        console.print("[yellow]Manager cycle detected; affected people are shown as roots[/yellow]")

    orphans = find_orphans(data.people)
    if orphans:
        console.print(f"[yellow]{len(orphans)} people report to a manager not in the data:[/yellow]")
        for person in orphans:
            console.print(f"  {person.name or person.id} [dim]→ {person.manager_id}[/dim]")


@app.command(name="export")
def export_cmd(
    records: Path = typer.Argument(help="JSON or YAML record file"),
    output: Path = typer.Option(..., help="Output file path"),
    fmt: str = typer.Option("json", "--format", help="Export format: json or yaml"),
    user: str | None = typer.Option(None, help="Export only this viewer's view"),
    team: bool | None = typer.Option(None, "--team/--all", help="Show only the viewer's team"),
    depth: TeamDepth | None = typer.Option(None, help="Team view depth: direct or full"),
    config: Path | None = typer.Option(None, help="YAML config file"),
) -> None:
    """Export the computed forest."""
    from orgchart_engine.hierarchy.builder import build_hierarchy
    from orgchart_engine.hierarchy.scope import build_view
    from orgchart_engine.identity.normalizer import GuidCache

    cfg = _config(config, team, depth)
    data = _load(records)
    hierarchy = build_hierarchy(data.people)
    forest = build_view(hierarchy, user, cfg, GuidCache(cfg.guid_cache_size))

    if fmt == "yaml":
        from orgchart_engine.export.yaml import export_forest_yaml

        export_forest_yaml(forest, output)
    else:
        from orgchart_engine.export.json import export_forest_json

        export_forest_json(forest, output)

    console.print(f"[green]Exported {len(forest)} root(s) to {output}[/green]")


if __name__ == "__main__":
    app()
