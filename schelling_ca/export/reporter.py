"""Summary report generation for Schelling CA simulation."""

from typing import Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Reporter:
    """Generates summary statistics and formatted text report."""

    def __init__(self, config_label: str, seed: Optional[int],
                 threshold: float):
        self.config_label = config_label
        self.seed = seed
        self.threshold = threshold
        self.initial_segregation: Optional[float] = None
        self.peak_segregation = 0.0
        self.converged_at: Optional[int] = None
        self.total_moves = 0

    def update(self, state: "SimulationState") -> None:
        """Accumulate metrics per step."""
        segregation = state.metrics.get('segregation', 0.0)
        if self.initial_segregation is None:
            self.initial_segregation = segregation
        if segregation > self.peak_segregation:
            self.peak_segregation = segregation

        self.total_moves += int(state.metrics.get('moved', 0))

        if self.converged_at is None and state.converged:
            self.converged_at = state.step

    def generate_summary(self, final_state: "SimulationState",
                         output_dir: Path,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        metrics = final_state.metrics
        type_a = int(metrics.get('type_a', 0))
        type_b = int(metrics.get('type_b', 0))
        empty = int(metrics.get('empty', 0))
        satisfied = metrics.get('satisfied_fraction', 0.0)
        segregation = metrics.get('segregation', 0.0)
        initial = self.initial_segregation or 0.0

        # Build report
        lines = [
            "",
            "=" * 80,
            "                    SCHELLING SEGREGATION SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_label}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            f"Threshold: {self.threshold:.2f}",
            "",
            "SIMULATION METRICS",
            "-" * 40,
            f"Grid:                  {final_state.size}x{final_state.size}",
            f"Population:            {type_a} A / {type_b} B / {empty} empty",
            f"Total Steps:           {final_state.step}",
            f"Total Moves:           {self.total_moves}",
            f"Satisfied Agents:      {satisfied:.1%}",
            f"Like Neighbours:       {initial:.1%} -> {segregation:.1%} "
            f"(peak {self.peak_segregation:.1%})",
            "",
            "EMERGENT BEHAVIORS DETECTED",
            "-" * 40,
        ]

        if self.converged_at is not None:
            lines.append(f"[X] Converged: no unsatisfied agents at step {self.converged_at}")
        else:
            lines.append("[ ] Converged: unsatisfied agents remain")

        lines += [
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        # Output file paths
        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
