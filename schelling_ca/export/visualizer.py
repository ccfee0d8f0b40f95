"""Visualization and export for Schelling CA simulation."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap, to_rgb
from pathlib import Path
from typing import List, TYPE_CHECKING
from PIL import Image
import io

from ..model.cell import CellState

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Visualizer:
    """
    Renders completed simulation snapshots using matplotlib.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Color scheme, indexed by CellState value
    COLORS = {
        CellState.EMPTY: '#FFFFFF',   # White
        CellState.TYPE_A: '#E74C3C',  # Red
        CellState.TYPE_B: '#3498DB',  # Blue
    }

    def __init__(self, size: int):
        self.size = size
        self.cmap = ListedColormap([self.COLORS[s] for s in CellState])
        self.frames: List[Image.Image] = []

    def _create_figure(self, state: "SimulationState") -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        fig, ax = plt.subplots(figsize=(6, 6.5))

        ax.imshow(state.cells, cmap=self.cmap, vmin=0, vmax=len(CellState) - 1,
                  interpolation='nearest', origin='upper')

        satisfied = state.metrics.get('satisfied_fraction', 0.0)
        segregation = state.metrics.get('segregation', 0.0)
        ax.set_title(f'Step {state.step} | Satisfied: {satisfied:.1%} | '
                     f'Like neighbours: {segregation:.1%}')
        ax.set_xticks([])
        ax.set_yticks([])

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "SimulationState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "SimulationState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def render_rgb(self, state: "SimulationState") -> np.ndarray:
        """Map a snapshot to an (N, N, 3) uint8 image without matplotlib axes."""
        palette = np.array(
            [to_rgb(self.COLORS[s]) for s in CellState]
        )
        return (palette[state.cells] * 255).astype(np.uint8)

    def generate_gif(self, output_path: Path, fps: int = 10) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )

    def clear_frames(self) -> None:
        """Clear buffered frames."""
        self.frames.clear()
