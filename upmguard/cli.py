"""CLI entry point: upmguard.

Subcommands:
    upmguard validate Packages/com.foo.bar --graph graph.json   # dependency chain test
    upmguard sync Packages/com.foo.bar --project .              # sync package.json deps
    upmguard index --project .                                  # dump module -> package map
    upmguard save Packages/com.foo.bar                          # bump patch + git commit/tag
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from upmguard.core.config import load_tables
from upmguard.core.logging import setup_logging
from upmguard.exceptions import SubprocessFailure, UpmGuardError

_STATUS_ICON = {
    "passed": "PASS",
    "failed": "FAIL",
    "no_assets": "EMPTY",
    "error": "ERROR",
}


def _fail(exc: Exception) -> None:
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """UPM Guard: keep Unity package dependencies declared and in bounds."""
    setup_logging("DEBUG" if verbose else None)


@main.command("validate")
@click.argument("package_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--graph",
    "graph_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Exported asset graph JSON ({asset: [dependencies]})",
)
@click.option("--tables", "tables_file", default=None, type=click.Path(path_type=Path), help="Tables overlay JSON")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def validate_cmd(package_dir: Path, graph_file: Path, tables_file: Path | None, as_json: bool) -> None:
    """Check that every asset dependency stays inside declared packages."""
    from upmguard.engines.boundary_validator import BoundaryValidator, RunStatus, render_issue
    from upmguard.graph import JsonAssetGraph

    try:
        tables = load_tables(tables_file)
        graph = JsonAssetGraph.from_file(graph_file)
    except UpmGuardError as e:
        _fail(e)

    report = BoundaryValidator(graph, tables).check(package_dir)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "status": report.status.value,
                    "package": report.package.name if report.package else None,
                    "scanned_assets": report.scanned_asset_count,
                    "scanned_dependencies": report.scanned_dependency_count,
                    "issues": [
                        {
                            "owner": i.owner,
                            "dependency": i.dependency,
                            "reason": i.reason.value,
                            "suggested_fix": i.suggested_fix,
                        }
                        for i in report.issues
                    ],
                    "notes": report.notes,
                    "message": report.message,
                    "error_kind": report.error_kind,
                },
                indent=2,
            )
        )
    else:
        if report.package:
            click.echo(f"Package: {report.package.name}  ({report.package.root})")
        click.echo(f"[{_STATUS_ICON[report.status.value]}] {report.message}")
        for note in report.notes:
            click.echo(f"  - {note}")
        for issue in report.issues:
            click.echo("")
            click.echo(render_issue(issue))

    if report.status is RunStatus.PASSED:
        return
    sys.exit(2 if report.status is RunStatus.NO_ASSETS else 1)


@main.command("sync")
@click.argument("package_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--project",
    "project_dir",
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
    help="Unity project root (contains Packages/ and Library/)",
)
@click.option("--no-fallback", is_flag=True, help="Disable the C# source fallback scan")
@click.option("--tables", "tables_file", default=None, type=click.Path(path_type=Path), help="Tables overlay JSON")
def sync_cmd(package_dir: Path, project_dir: Path, no_fallback: bool, tables_file: Path | None) -> None:
    """Add missing package.json dependencies from asmdef references."""
    from upmguard.engines.manifest_reconciler import sync_dependencies

    try:
        report = sync_dependencies(
            package_dir,
            project_dir,
            tables=load_tables(tables_file),
            fallback_scan=not no_fallback,
        )
    except UpmGuardError as e:
        _fail(e)

    click.echo(f"Required assemblies: {len(report.required_modules)}")
    click.echo(f"Resolved packages: {', '.join(sorted(report.resolved_packages)) or '-'}")
    for entry in report.added:
        click.echo(f"  + {entry}")
    for entry in report.updated:
        click.echo(f"  ~ {entry}")
    if report.skipped:
        click.echo(f"Unresolved assemblies: {', '.join(report.skipped)}")
    for note in report.notes:
        click.echo(f"Note: {note}")
    click.echo("package.json updated." if report.changed else "package.json unchanged.")


@main.command("index")
@click.option(
    "--project",
    "project_dir",
    default=".",
    type=click.Path(file_okay=False, path_type=Path),
    help="Unity project root",
)
def index_cmd(project_dir: Path) -> None:
    """Print the assembly -> package map of installed packages."""
    from upmguard.engines.package_index import build_index, default_install_locations

    index = build_index(default_install_locations(project_dir))
    if not len(index):
        click.echo("No assemblies found.")
        return
    for module, package_id in sorted(index.items()):
        click.echo(f"  {module:40s}  {package_id}")


@main.command("save")
@click.argument("package_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("-m", "--message", default=None, help="Commit message (default: Bump version to v<next>)")
def save_cmd(package_dir: Path, message: str | None) -> None:
    """Bump the patch version, then git add/commit/tag."""
    from upmguard.engines.release import save_package

    try:
        result = save_package(package_dir, message)
    except SubprocessFailure as e:
        click.echo(f"Error: git {' '.join(e.argv[1:])} failed (exit {e.exit_code})", err=True)
        if e.stderr:
            click.echo(e.stderr, err=True)
        if e.stdout:
            click.echo(e.stdout, err=True)
        sys.exit(1)
    except UpmGuardError as e:
        _fail(e)

    click.echo(f"Saved {result.package} -> v{result.version} (tag {result.tag})")


if __name__ == "__main__":
    main()
