from __future__ import annotations
import json
import logging
from typing import Optional

import typer

from argonrefine import ArgonRefineError
from argonrefine.policy import classify, window
from .runners.common import (
    build_recommender,
    describe_backends,
    export_json,
    format_size,
    parse_size,
)

app = typer.Typer(add_completion=False, help="Argon2id cost parameter recommender")


@app.callback()
def _configure(
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="-v for progress, -vv for every probe."),
) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _fail(exc: ArgonRefineError) -> None:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=2)


@app.command()
def recommend(
    target_ms: Optional[int] = typer.Option(None, "--target-ms", envvar="ARGONREFINE_TARGET_MS", help="Target hash latency in milliseconds [default: 500]."),
    rps: Optional[int] = typer.Option(None, "--rps", help="Derive the target from requests per second (overrides --target-ms)."),
    tolerance: Optional[int] = typer.Option(None, "--tolerance", help="Accepted distance from the target [default: target/2]."),
    backend: str = typer.Option("auto", "--backend", "-b", envvar="ARGONREFINE_BACKEND", help="auto, argon or sodium (aliases accepted)."),
    min_memory: Optional[str] = typer.Option(None, "--min-memory", help="Lower memory bound, e.g. 16M."),
    max_memory: Optional[str] = typer.Option(None, "--max-memory", help="Upper memory bound, e.g. 256M."),
    min_time: Optional[int] = typer.Option(None, "--min-time"),
    max_time: Optional[int] = typer.Option(None, "--max-time"),
    limit: int = typer.Option(10, "--limit", "-n", help="Show at most N candidates (0 for all)."),
    as_json: bool = typer.Option(False, "--json/--table", help="Print candidates as JSON."),
    export: Optional[str] = typer.Option(None, "--export", help="Write the full result to this JSON file."),
) -> None:
    """Search for time/memory costs that hash in roughly the target time."""
    try:
        rec = build_recommender(
            target_ms=target_ms,
            rps=rps,
            tolerance=tolerance,
            backend=backend,
            min_memory=min_memory,
            max_memory=max_memory,
            min_time=min_time,
            max_time=max_time,
        )
        result = rec.run()
    except ArgonRefineError as exc:
        _fail(exc)
    except ValueError as exc:
        raise typer.BadParameter(str(exc))

    path = export_json(result, export)
    shown = result.samples if limit <= 0 else result.samples[:limit]
    if as_json:
        typer.echo(json.dumps([s.to_dict() for s in shown], indent=2))
    else:
        low, high = result.config.window
        typer.echo(
            f"backend={result.backend} target={result.config.target_ms} ms "
            f"window=[{low}, {high}] ms probes={result.probes}"
        )
        if not shown:
            typer.echo("No candidates within the tolerance window.")
        for s in shown:
            typer.echo(f"- time_cost={s.time_cost} memory_cost={s.memory_cost} ({format_size(s.memory_cost)}) -> {s.measured_ms} ms")
    if path is not None:
        typer.echo(f"Exported {len(result.samples)} candidate(s) to {path}", err=True)


@app.command("list-backends")
def list_backends() -> None:
    """List hashing backends, their aliases and availability."""
    for row in describe_backends():
        if "resolves_to" in row:
            typer.echo(f"- {row['name']} -> {row['resolves_to']}")
            continue
        aliases = ", ".join(row["aliases"])
        state = "available" if row["available"] else "missing"
        typer.echo(f"- {row['name']} ({aliases}): {state}")


@app.command()
def cost(
    time_cost: int = typer.Option(..., "--time-cost", "-t"),
    memory_cost: str = typer.Option(..., "--memory-cost", "-m", help="Bytes, or a size like 64M."),
    backend: str = typer.Option("auto", "--backend", "-b", envvar="ARGONREFINE_BACKEND"),
) -> None:
    """Time a single hash with the given parameters."""
    try:
        rec = build_recommender(backend=backend)
        elapsed = rec.get_millisecond_cost(time_cost, parse_size(memory_cost))
    except ArgonRefineError as exc:
        _fail(exc)
    except ValueError as exc:
        raise typer.BadParameter(str(exc))
    typer.echo(f"{elapsed} ms")


@app.command()
def decide(
    milliseconds: int = typer.Argument(..., help="Measured latency to classify."),
    target_ms: int = typer.Option(500, "--target-ms", envvar="ARGONREFINE_TARGET_MS"),
    tolerance: Optional[int] = typer.Option(None, "--tolerance"),
) -> None:
    """Classify a latency against the tolerance window."""
    try:
        low, high = window(target_ms, tolerance)
        verdict = classify(target_ms, tolerance, milliseconds)
    except ArgonRefineError as exc:
        _fail(exc)
    typer.echo(f"{verdict.name} (window [{low}, {high}] ms)")


def app_main():
    app()

if __name__ == "__main__":
    app_main()
