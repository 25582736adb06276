"""Analyze command: run the planner on a module manifest."""

import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.table import Table

from ..api import analyze as run_analysis
from ..exceptions import RefactorPlannerError
from ..logging_config import get_logger, setup_logging
from ..orchestration.models import AnalyzerStatus
from ..orchestration.orchestrator import RunResult
from . import app
from ._common import console, risk_text, score_style

logger = get_logger(__name__)

MAX_ROWS = 15

STATUS_STYLES = {
    AnalyzerStatus.SUCCESS: "green",
    AnalyzerStatus.SKIPPED: "yellow",
    AnalyzerStatus.ERROR: "red",
}


@app.command()
def analyze(
    manifest: Path = typer.Argument(
        ...,
        help="JSON manifest of modules and their resolved imports",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    actions: Optional[Path] = typer.Option(
        None,
        "--actions",
        "-a",
        help="JSON file of raw restructuring actions (default: actions in the manifest)",
        exists=True,
        dir_okay=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML configuration file",
        exists=True,
        dir_okay=False,
    ),
    hotspots: Optional[int] = typer.Option(
        None,
        "--hotspots",
        "-n",
        help="Number of hotspots to report",
        min=0,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging and per-analyzer status",
    ),
):
    """
    Analyze module dependencies and plan restructuring actions.

    [bold cyan]Examples:[/bold cyan]

      refactor-planner analyze modules.json

      refactor-planner analyze modules.json --actions actions.json --hotspots 5

      refactor-planner analyze modules.json --json
    """
    # Replaced by the configured verbosity once the config has loaded
    setup_logging("verbose" if verbose else "normal")

    overrides: dict[str, Any] = {"verbose": verbose}
    if hotspots is not None:
        overrides["hotspot_count"] = hotspots

    try:
        run = run_analysis(manifest, actions=actions, config_file=config, **overrides)
    except RefactorPlannerError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        if json_output:
            print(json.dumps(e.to_dict(), indent=2))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        print(json.dumps(run_to_dict(run), indent=2))
    else:
        _output_rich(run, verbose=verbose)

    architecture = run.get("architecture")
    if architecture is None or architecture.status is AnalyzerStatus.ERROR:
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------


def run_to_dict(run: RunResult) -> dict:
    """Machine-readable summary of a run."""
    output: dict[str, Any] = {
        "analyzers": {
            analyzer_id: {
                "status": result.status.value,
                "reason": result.reason,
                "cause": result.cause.value if result.cause else None,
                "duration_ms": round(result.duration_ms, 3),
            }
            for analyzer_id, result in run.results.items()
        },
        "order": list(run.order),
        "broken_edges": [list(edge) for edge in run.broken_edges],
        "stats": {
            "succeeded": run.stats.succeeded,
            "skipped": run.stats.skipped,
            "failed": run.stats.failed,
            "duration_ms": round(run.stats.duration_ms, 3),
        },
    }

    health = run.data("architecture")
    if health is not None:
        output["architecture"] = {
            "score": health.score,
            "violations": [
                {
                    "kind": v.kind.value,
                    "from": v.source,
                    "to": v.target,
                    "severity": v.severity.value,
                    "message": v.message,
                    "fix": v.fix,
                    "edges": [list(e) for e in v.edges],
                }
                for v in health.violations
            ],
            "layers": health.layers,
            "skipped_modules": health.skipped_modules,
            "dependency_graph": health.dependency_graph,
        }

    domains = run.data("domains")
    if domains is not None:
        output["domains"] = [
            {
                "name": d.name,
                "path": d.path,
                "files": d.files,
                "coherence": d.coherence,
                "suggestion": d.suggestion or None,
                "should_move": [
                    {"module": m.module, "suggested_domain": m.suggested_domain}
                    for m in d.should_move
                ],
            }
            for d in domains
        ]

    ranking = run.data("ranking")
    if ranking is not None:
        output["ranking"] = {
            "hotspots": [
                {
                    "path": h.path,
                    "centrality": h.centrality,
                    "percentile": h.percentile,
                    "dependents": h.dependent_count,
                    "dependencies": h.dependency_count,
                    "risk_level": h.risk_level.value,
                    "instability": round(h.coupling.instability, 4),
                    "reason": h.reason,
                }
                for h in ranking.hotspots
            ],
            "classification": {m: c.value for m, c in ranking.classification.items()},
            "phases": [
                {
                    "order": p.order,
                    "modules": list(p.modules),
                    "category": p.category,
                    "risk_score": p.risk_score,
                    "risk_level": p.risk_level.value,
                    "can_parallelize": p.can_parallelize,
                    "prerequisites": list(p.prerequisites),
                }
                for p in ranking.safe_order.phases
            ],
            "estimated_risk": ranking.safe_order.estimated_risk.value,
            "stats": {
                "nodes": ranking.stats.node_count,
                "edges": ranking.stats.edge_count,
                "iterations": ranking.stats.iterations,
                "converged": ranking.stats.converged,
                "cycles": ranking.stats.cycle_count,
            },
        }

    plan = run.data("migration")
    if plan is not None:
        output["plan"] = {
            "actions": [
                {
                    "id": a.id,
                    "kind": a.kind.value,
                    "sources": list(a.sources),
                    "target": a.target,
                    "order": a.order,
                    "prerequisite": list(a.prerequisite),
                    "risk_level": a.risk_level.value,
                    "can_parallelize": a.can_parallelize,
                    "rollback_point": a.rollback_point,
                    "reason": a.reason,
                }
                for a in plan.actions
            ],
            "rollback_points": plan.rollback_points,
            "files_affected": plan.files_affected,
            "imports_to_update": plan.imports_to_update,
            "risk_summary": {
                "safe": plan.risk_summary.safe,
                "medium": plan.risk_summary.medium,
                "risky": plan.risk_summary.risky,
            },
        }

    recommendations = run.data("recommendations")
    if recommendations is not None:
        output["recommendations"] = [
            {
                "id": r.id,
                "priority": r.priority,
                "category": r.category,
                "title": r.title,
                "description": r.description,
                "effort": r.effort,
                "expected_improvement": r.expected_improvement,
                "affected_files": list(r.affected_files),
                "priority_reason": r.priority_reason or None,
            }
            for r in recommendations
        ]

    return output


# ---------------------------------------------------------------------------
# Rich output
# ---------------------------------------------------------------------------


def _output_rich(run: RunResult, verbose: bool = False) -> None:
    console.print()

    architecture = run.get("architecture")
    health = run.data("architecture")
    if health is None:
        reason = architecture.reason if architecture else "not registered"
        console.print(f"[red]Architecture analysis failed:[/red] {reason}")
        console.print()
        _output_analyzers(run, verbose=verbose)
        return

    style = score_style(health.score)
    console.print(
        f"[bold cyan]ARCHITECTURE HEALTH[/bold cyan]  [{style}]{health.score:.0f}/100[/{style}]"
        f"  [dim]{len(health.graph)} modules, {health.graph.edge_count} imports[/dim]"
    )
    if health.skipped_modules:
        console.print(f"[yellow]Skipped {len(health.skipped_modules)} unreadable module(s)[/yellow]")
    console.print()

    if health.violations:
        table = Table(title="Violations", show_header=True, title_justify="left")
        table.add_column("Severity")
        table.add_column("Kind")
        table.add_column("Message")
        for v in health.violations[:MAX_ROWS]:
            color = "red" if v.severity.value == "error" else "yellow"
            table.add_row(f"[{color}]{v.severity.value}[/{color}]", v.kind.value, v.message)
        console.print(table)
        _more(len(health.violations))

    ranking = run.data("ranking")
    if ranking is not None and ranking.hotspots:
        table = Table(title="Hotspots", show_header=True, title_justify="left")
        table.add_column("Module", min_width=24)
        table.add_column("Centrality", justify="right")
        table.add_column("Pctl", justify="right")
        table.add_column("Ca", justify="right")
        table.add_column("Ce", justify="right")
        table.add_column("Risk")
        table.add_column("Reason", style="dim")
        for h in ranking.hotspots:
            table.add_row(
                h.path,
                f"{h.centrality:.4f}",
                str(h.percentile),
                str(h.dependent_count),
                str(h.dependency_count),
                risk_text(h.risk_level),
                h.reason,
            )
        console.print(table)

    if ranking is not None and ranking.safe_order.phases:
        order = ranking.safe_order
        table = Table(
            title=f"Safe order (estimated risk: {order.estimated_risk.value})",
            show_header=True,
            title_justify="left",
        )
        table.add_column("#", justify="right")
        table.add_column("Modules")
        table.add_column("Category")
        table.add_column("Risk")
        table.add_column("After", style="dim")
        for p in order.phases[:MAX_ROWS]:
            table.add_row(
                str(p.order),
                ", ".join(p.modules),
                p.category,
                f"{risk_text(p.risk_level)} ({p.risk_score})",
                ", ".join(str(n) for n in p.prerequisites),
            )
        console.print(table)
        _more(len(order.phases))

    plan = run.data("migration")
    if plan is not None and plan.actions:
        table = Table(title="Migration plan", show_header=True, title_justify="left")
        table.add_column("#", justify="right")
        table.add_column("Action")
        table.add_column("Sources")
        table.add_column("Target")
        table.add_column("Risk")
        table.add_column("Requires", style="dim")
        for a in plan.actions:
            marker = " [cyan]⟲[/cyan]" if a.rollback_point else ""
            table.add_row(
                str(a.order),
                a.id + marker,
                ", ".join(a.sources),
                a.target or "",
                risk_text(a.risk_level),
                ", ".join(a.prerequisite),
            )
        console.print(table)
        console.print(
            f"[dim]{plan.files_affected} files affected, "
            f"{plan.imports_to_update} imports to update, "
            f"rollback points: {', '.join(plan.rollback_points) or 'none'}[/dim]"
        )
        console.print()

    recommendations = run.data("recommendations")
    if recommendations:
        console.print("[bold cyan]RECOMMENDATIONS[/bold cyan]")
        for r in recommendations[:MAX_ROWS]:
            console.print(f"  [bold]{r.priority:>4}[/bold]  {r.title}")
            console.print(f"        [dim]{r.description}[/dim]")
        _more(len(recommendations))

    _output_analyzers(run, verbose=verbose)


def _output_analyzers(run: RunResult, verbose: bool = False) -> None:
    """Status of every analyzer with --verbose, otherwise only those that did not succeed."""
    rows = [(aid, r) for aid, r in run.results.items() if verbose or not r.ok]
    if not rows:
        return
    table = Table(title="Analyzers", show_header=True, title_justify="left")
    table.add_column("Analyzer")
    table.add_column("Status")
    table.add_column("Time", justify="right")
    table.add_column("Reason", style="dim")
    for analyzer_id, result in rows:
        color = STATUS_STYLES[result.status]
        table.add_row(
            analyzer_id,
            f"[{color}]{result.status.value}[/{color}]",
            f"{result.duration_ms:.1f}ms",
            result.reason or "",
        )
    console.print(table)


def _more(total: int) -> None:
    if total > MAX_ROWS:
        console.print(f"[dim]  ... and {total - MAX_ROWS} more[/dim]")
    console.print()
