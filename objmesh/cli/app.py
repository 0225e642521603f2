"""Command-line interface for objmesh."""

from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from objmesh import __version__
from objmesh.core import Config, ObjMeshError, load_config
from objmesh.geometry.normals import NormalsFactory
from objmesh.loaders import LoaderRegistry
from objmesh.processing import inspect_mesh
from objmesh.utils import create_cache_manager, setup_logging

app = typer.Typer(
    name="objmesh",
    help="Turn OBJ geometry into renderer-ready indexed meshes",
    add_completion=False,
)
console = Console()


def _load_config(config: Optional[Path]) -> Config:
    cfg = load_config(config)
    setup_logging(cfg.logging)
    return cfg


@app.command()
def inspect(
    obj_file: Path = typer.Argument(
        ...,
        exists=True,
        help="Path to OBJ file to inspect",
    ),
    detailed: bool = typer.Option(
        False,
        "--detailed",
        "-d",
        help="Show normal statistics",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file",
    ),
) -> None:
    """Load an OBJ file and display information about the mesh."""
    try:
        cfg = _load_config(config)
        registry = LoaderRegistry(config=cfg)

        with console.status("Loading OBJ file..."):
            mesh = registry.load(obj_file)
        report = inspect_mesh(mesh)

        table = Table(title="Mesh Information", show_header=False)
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("File", str(obj_file))
        table.add_row("File Size", f"{obj_file.stat().st_size / 1024:.1f} KB")
        table.add_row("Vertices", f"{report.vertex_count:,}")
        table.add_row("Indices", f"{report.index_count:,}")
        table.add_row("Triangles", f"{report.triangle_count:,}")
        table.add_row("UV Components", str(report.uv_components))
        table.add_row("Normal Mode", cfg.normals.mode)
        if report.vertex_count:
            lo, hi = report.bounds_min, report.bounds_max
            table.add_row(
                "Bounding Box",
                f"[{lo[0]:.2f}, {lo[1]:.2f}, {lo[2]:.2f}] to "
                f"[{hi[0]:.2f}, {hi[1]:.2f}, {hi[2]:.2f}]",
            )

        console.print(table)

        if report.errors:
            console.print("Errors:", style="red")
            for error in report.errors:
                console.print(f"  • {error}", style="red")
        if report.warnings:
            console.print("Warnings:", style="yellow")
            for warning in report.warnings:
                console.print(f"  • {warning}", style="yellow")

        if detailed:
            console.print("\nNormals:")
            console.print(f"  • Zero: {report.zero_normals:,}")
            console.print(f"  • Unit length: {report.unit_normals:,}")
            console.print(
                f"  • Length: min={report.normal_length_min:.4f}, "
                f"max={report.normal_length_max:.4f}, "
                f"mean={report.normal_length_mean:.4f}"
            )
            console.print(f"  • Unreferenced vertices: {report.unreferenced_vertices:,}")
            console.print(f"  • Degenerate triangles: {report.degenerate_triangles:,}")

    except ObjMeshError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def convert(
    obj_files: List[Path] = typer.Argument(
        ...,
        help="OBJ files to convert",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output directory for .npz buffers (defaults to beside each input)",
    ),
    mode: Optional[str] = typer.Option(
        None,
        "--mode",
        "-m",
        help="Normal synthesis mode",
    ),
    renormalize: Optional[bool] = typer.Option(
        None,
        "--renormalize/--no-renormalize",
        help="Rescale accumulated normals to unit length",
    ),
    uv_components: Optional[int] = typer.Option(
        None,
        "--uv-components",
        help="Components per UV entry (2 or 3)",
    ),
    parallel: bool = typer.Option(
        False,
        "--parallel",
        "-p",
        help="Load files in parallel",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file",
    ),
) -> None:
    """Convert OBJ files into position/normal/UV/index buffers."""
    console.print(f"\nConverting {len(obj_files)} OBJ file(s)...")

    try:
        cfg = _load_config(config)

        # Frozen config: apply command line overrides through a copy
        data = cfg.to_dict()
        if mode is not None:
            data["normals"]["mode"] = mode
        if renormalize is not None:
            data["normals"]["renormalize"] = renormalize
        if uv_components is not None:
            data["uv"]["components"] = uv_components
        cfg = Config.from_dict(data)
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)

    collisions = _output_collisions(obj_files, output_dir)
    if collisions:
        for target, sources in collisions.items():
            names = ", ".join(str(s) for s in sources)
            console.print(f"[red]Output collision: {names} would all write {target}[/red]")
        raise typer.Exit(1)

    if output_dir:
        output_dir.mkdir(parents=True, exist_ok=True)

    registry = LoaderRegistry(config=cfg)
    results = registry.load_many(obj_files, parallel=parallel, progress=True)

    for result in results:
        if not result.success:
            continue
        target = _output_path(result.path, output_dir)
        result.mesh.save_npz(target)
        console.print(f"  {result.path.name} -> [cyan]{target}[/cyan]")

    successful = sum(1 for r in results if r.success)
    failed = len(results) - successful
    console.print(f"\nConverted {successful}/{len(results)} files")

    if failed > 0:
        console.print(f"Failed to convert {failed} files:")
        for result in results:
            if not result.success:
                console.print(f"  • {result.path.name}: {result.error}", style="red")
        raise typer.Exit(1)


def _output_path(obj_file: Path, output_dir: Optional[Path]) -> Path:
    return (output_dir or obj_file.parent) / obj_file.with_suffix(".npz").name


def _output_collisions(
    obj_files: List[Path], output_dir: Optional[Path]
) -> Dict[Path, List[Path]]:
    """Map each .npz target written by more than one distinct input to its inputs."""
    targets: Dict[Path, List[Path]] = {}
    for obj_file in obj_files:
        sources = targets.setdefault(_output_path(obj_file, output_dir), [])
        if not any(s.resolve() == obj_file.resolve() for s in sources):
            sources.append(obj_file)
    return {target: sources for target, sources in targets.items() if len(sources) > 1}


@app.command()
def info() -> None:
    """Display information about objmesh."""
    console.print("\n[cyan]objmesh[/cyan] - OBJ to indexed mesh loader")
    console.print(f"Version: {__version__}")

    registry = LoaderRegistry(config=Config())
    console.print(f"\nRegistered extensions: {', '.join(registry.extensions())}")
    console.print(f"Normal modes: {', '.join(NormalsFactory.available_modes())}")


@app.command()
def cache(
    action: str = typer.Argument(
        ...,
        help="Cache action: stats, clear, or evict"
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file"
    ),
) -> None:
    """Manage the mesh cache."""
    cfg = _load_config(config)
    cache_mgr = create_cache_manager(cfg.cache)

    if action == "stats":
        stats = cache_mgr.get_stats()

        if not stats.get("enabled", False):
            console.print("[yellow]Cache is disabled[/yellow]")
            return

        table = Table(title="Cache Statistics", show_header=False)
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Location", stats.get("location", "N/A"))
        table.add_row("Size Limit", f"{stats.get('size_limit_gb', 0):.1f} GB")
        table.add_row("Entries", f"{stats.get('entries', 0):,}")
        table.add_row("Size", f"{stats.get('size_mb', 0):.1f} MB")
        table.add_row("Hits", f"{stats.get('hits', 0):,}")
        table.add_row("Misses", f"{stats.get('misses', 0):,}")
        table.add_row("Hit Rate", f"{stats.get('hit_rate', 0):.1%}")

        console.print(table)

    elif action == "clear":
        if typer.confirm("Are you sure you want to clear the cache?"):
            cache_mgr.clear()
            console.print("[green]Cache cleared successfully[/green]")
        else:
            console.print("[yellow]Cache clear cancelled[/yellow]")

    elif action == "evict":
        count = cache_mgr.evict_expired()
        console.print(f"[green]Evicted {count} expired entries[/green]")

    else:
        console.print(f"[red]Unknown action: {action}[/red]")
        console.print("Valid actions: stats, clear, evict")
        raise typer.Exit(1)


def main() -> None:
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
