"""Benchmarks for flatzip bulk operations against step-by-step pulls."""

import functools
import timeit
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import Any, Final, NamedTuple

import polars as pl
import typer
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)
from rich.table import Table
from rich.text import Text

import flatzip as fz

type Pairs = list[tuple[int, list[int]]]
type BenchFn = Callable[[], object]


@dataclass(slots=True)
class Row:
    """Raw row of timing data."""

    category: str
    name: str
    impl: str
    size: int
    run_idx: int
    time: float


class Variant(NamedTuple):
    """A specific benchmark variant size."""

    size: int
    n_runs: int
    step_fn: BenchFn
    bulk_fn: BenchFn


class Benchmark(NamedTuple):
    """A benchmark with multiple data sizes."""

    category: str
    name: str
    variants: list[Variant]


WARMUP_RUNS: Final = 5
CALLS_BY_RUN: Final = 10
TARGET_BENCH_SEC: Final = 1
MIN_RUNS: Final = 20
GROUP_WIDTH: Final = 8
SIZES: Final = (256, 1024, 4096)

app = typer.Typer(help="Benchmarks for flatzip bulk operations.")

CONSOLE: Final = Console()

BENCHMARKS: list[Benchmark] = []


def _jagged(size: int) -> Pairs:
    """`size` groups, every third one empty."""
    return [(k, [] if k % 3 == 0 else list(range(k % GROUP_WIDTH))) for k in range(size)]


def bench[R](
    category: str,
    *,
    step: Callable[[Pairs], R],
) -> Callable[[Callable[[Pairs], R]], Callable[[Pairs], R]]:
    """Register **func** as the bulk implementation, timed against **step**."""

    def decorator(func: Callable[[Pairs], R]) -> Callable[[Pairs], R]:
        variants: list[Variant] = []
        for size in SIZES:
            data = _jagged(size)
            assert step(data) == func(data), (
                f"{func.__name__}: step and bulk implementations must agree for size {size}"
            )
            step_fn = partial(step, data)
            bulk_fn = partial(func, data)
            n_runs = max(_estimate_n_runs(step_fn), _estimate_n_runs(bulk_fn))
            variants.append(Variant(size, n_runs, step_fn, bulk_fn))

        BENCHMARKS.append(Benchmark(category, func.__name__, variants))
        return func

    return decorator


def _estimate_n_runs(fn: BenchFn) -> int:
    warmup_time = timeit.timeit(fn, number=WARMUP_RUNS) / WARMUP_RUNS
    est = int(TARGET_BENCH_SEC / 2 / warmup_time / CALLS_BY_RUN)
    return max(MIN_RUNS, est)


def _add(acc: int, pair: tuple[int, int]) -> int:
    return acc + pair[0] * pair[1]


@bench("fold", step=lambda data: functools.reduce(_add, fz.flat_zip(data), 0))
def fold(data: Pairs) -> int:  # noqa: D103
    return fz.flat_zip(data).fold(0, _add)


@bench("fold", step=lambda data: functools.reduce(_add, fz.flat_zip(data).rev(), 0))
def rfold(data: Pairs) -> int:  # noqa: D103
    return fz.flat_zip(data).rfold(0, _add)


@bench("terminal", step=lambda data: sum(1 for _ in fz.flat_zip(data)))
def count(data: Pairs) -> int:  # noqa: D103
    return fz.flat_zip(data).count()


def _last_by_steps(data: Pairs) -> fz.Option[tuple[int, int]]:
    it = fz.flat_zip(data)
    last: fz.Option[tuple[int, int]] = fz.NONE
    while (item := it.next()).is_some():
        last = item
    return last


@bench("terminal", step=_last_by_steps)
def last(data: Pairs) -> fz.Option[tuple[int, int]]:  # noqa: D103
    return fz.flat_zip(data).last()


def _collect_raw_timings(benchmarks: list[Benchmark]) -> list[Row]:
    """Collect raw timing data for all benchmarks. Stats computed at the end."""
    total_runs = sum(v.n_runs for b in benchmarks for v in b.variants) * 2
    CONSOLE.print(
        f"[dim]Found {len(benchmarks)} benchmarks, {total_runs} total runs[/dim]"
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeRemainingColumn(),
        console=CONSOLE,
    ) as progress:
        task = progress.add_task("[cyan]Running benchmarks...", total=total_runs)
        return [
            row
            for b in benchmarks
            for v in b.variants
            for row in _run_variant(progress, task, v, b)
        ]


def _run_variant(
    progress: Progress,
    task: Any,  # noqa: ANN401
    variant: Variant,
    bench: Benchmark,
) -> list[Row]:
    def _timed(run_idx: int, impl: str, fn: BenchFn) -> Row:
        progress.update(
            task,
            description=f"[cyan]{bench.category}: {bench.name} @ {variant.size} ({impl})",
        )
        time_taken = timeit.timeit(fn, number=CALLS_BY_RUN)
        progress.advance(task)
        return Row(bench.category, bench.name, impl, variant.size, run_idx, time_taken)

    return [
        _timed(run_idx, impl, fn)
        for impl, fn in (("bulk", variant.bulk_fn), ("step", variant.step_fn))
        for run_idx in range(variant.n_runs)
    ]


def _compute_all_stats(raw_rows: list[Row]) -> pl.DataFrame:
    """Compute median timings per implementation, and the bulk speedup over steps."""
    group = ["category", "name", "size"]
    stats = (
        pl.LazyFrame(
            [
                (r.category, r.name, r.impl, r.size, r.run_idx, r.time)
                for r in raw_rows
            ],
            schema=["category", "name", "impl", "size", "run_idx", "time"],
            orient="row",
        )
        .group_by("category", "name", "size", "impl")
        .agg(
            pl.col("time").median().alias("median"),
            pl.len().alias("runs"),
        )
    )
    return (
        stats.filter(pl.col("impl").eq("bulk"))
        .join(
            stats.filter(pl.col("impl").eq("step")).select(
                *group, pl.col("median").alias("step_median")
            ),
            on=group,
        )
        .rename({"median": "bulk_median"})
        .drop("impl")
        .with_columns(
            pl.col("step_median")
            .truediv("bulk_median")
            .sub(1)
            .mul(100)
            .alias("pct_change"),
        )
        .sort("category", "name", "size")
        .collect()
    )


def _build_results_table() -> Table:
    table = Table(title="Benchmark Results")
    table.add_column("Category", style="cyan")
    table.add_column("Operation", style="white")
    table.add_column("Size", justify="right", style="magenta")
    table.add_column("Runs", justify="right", style="magenta")
    table.add_column("Bulk (μs, median)", justify="right", style="green")
    table.add_column("Step (μs, median)", justify="right", style="yellow")
    table.add_column("Change", justify="right")
    return table


def _fill_table(df: pl.DataFrame, table: Table) -> None:
    for row in df.iter_rows(named=True):
        pct = row["pct_change"]
        table.add_row(
            row["category"],
            row["name"],
            str(row["size"]),
            str(row["runs"]),
            f"{row['bulk_median'] * 1_000_000:.2f}",
            f"{row['step_median'] * 1_000_000:.2f}",
            Text(f"{pct:+.1f}%", style="green bold" if pct > 0 else "red bold"),
        )


def _print_summary(df: pl.DataFrame) -> None:
    median_speedup = df.get_column("pct_change").median()
    wins = df.filter(pl.col("pct_change").gt(0)).height
    CONSOLE.print()
    CONSOLE.print(
        Text("Median speedup: ", style="bold").append(
            f"{median_speedup:+.1f}%",
            style="green bold" if median_speedup >= 0 else "red bold",
        )
    )
    CONSOLE.print(
        Text("Bulk wins: ", style="bold").append(f"{wins}/{df.height}", style="cyan")
    )


@app.command()
def main() -> None:
    """Run benchmarks."""
    CONSOLE.print("Running benchmarks...", style="bold blue")
    CONSOLE.print()
    df = _compute_all_stats(_collect_raw_timings(BENCHMARKS))
    CONSOLE.print()
    table = _build_results_table()
    _fill_table(df, table)
    CONSOLE.print(table)
    _print_summary(df)


if __name__ == "__main__":
    app()
