"""Ramp a simulated service from idle to overload.

Steps the load multiplier up every few ticks and records what a learner
would see: latency creeping up, then the knee, errors appearing past 70%
utilization, and bottlenecks engaging one tier after another.

## Ramp

```
    multiplier
    10 |                                                +----
     8 |                                        +-------+
     6 |                                +-------+
     4 |                        +-------+
     2 |                +-------+
     1 |--------+-------+
       +--------+-------+-------+-------+-------+-------+---> ticks
       0       10      20      30      40      50      60
```
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from scalemind import EngineSettings, SimulationEngine, SystemStatus
from scalemind.model.status import status_message
from scalemind.visual.charts import plot_degradation_curve, plot_history


@dataclass
class RampResult:
    engine: SimulationEngine
    statuses: list[SystemStatus]
    engaged_at: dict[str, int]


def run_ramp(
    steps: tuple[float, ...] = (1.0, 2.0, 4.0, 6.0, 8.0, 10.0),
    ticks_per_step: int = 10,
) -> RampResult:
    settings = EngineSettings(history_capacity=len(steps) * ticks_per_step + 1)
    engine = SimulationEngine(settings=settings)

    statuses: list[SystemStatus] = []
    engaged_at: dict[str, int] = {}

    def record(snapshot) -> None:
        statuses.append(engine.status)
        for bottleneck in engine.active_bottlenecks:
            engaged_at.setdefault(bottleneck.name, snapshot.active_users)

    engine.on_tick(record)
    for multiplier in steps:
        engine.set_user_multiplier(multiplier)
        engine.advance(ticks_per_step * settings.tick_interval_s)

    return RampResult(engine=engine, statuses=statuses, engaged_at=engaged_at)


def print_summary(result: RampResult) -> None:
    frame = result.engine.history_buffer.to_dataframe()

    print("\n" + "=" * 70)
    print("RAMP TO OVERLOAD")
    print("=" * 70)
    print(
        frame.groupby("active_users")[
            ["requests_per_second", "response_time", "error_rate", "cpu_usage", "memory_usage"]
        ]
        .last()
        .round(1)
        .to_string()
    )

    print("\nBottlenecks engaged:")
    for name, users in result.engaged_at.items():
        print(f"  {users:>6,} users  {name}")

    final = result.engine.status
    message = status_message(final)
    print(f"\nFinal status: {final.value} - {message.title}")
    print(f"  {message.description}")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Ramp a simulated service to overload")
    parser.add_argument("--ticks-per-step", type=int, default=10, help="Ticks at each load step")
    parser.add_argument("--output", type=str, default="output/ramp", help="Output directory")
    parser.add_argument("--no-viz", action="store_true", help="Skip chart generation")
    args = parser.parse_args()

    result = run_ramp(ticks_per_step=args.ticks_per_step)
    print_summary(result)

    if not args.no_viz:
        output_dir = Path(args.output)
        plot_history(result.engine.history_buffer, output_dir / "history.png")
        plot_degradation_curve(output_dir / "degradation.png", settings=result.engine.settings)
        print(f"\nCharts saved to: {output_dir.absolute()}")
