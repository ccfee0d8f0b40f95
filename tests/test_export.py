import numpy as np

from schelling_ca.export.reporter import Reporter
from schelling_ca.export.visualizer import Visualizer
from schelling_ca.model.cell import CellState
from schelling_ca.model.state import SimulationState


def _state(step, unsatisfied=3, moved=2, segregation=0.6):
    cells = np.array([
        [CellState.TYPE_A, CellState.TYPE_B],
        [CellState.EMPTY, CellState.TYPE_A],
    ], dtype=np.int8)
    metrics = {
        'type_a': 2, 'type_b': 1, 'empty': 1,
        'round_unsatisfied': unsatisfied, 'unsatisfied': unsatisfied,
        'moved': moved,
        'stranded': unsatisfied - moved,
        'satisfied_fraction': 0.5, 'segregation': segregation,
    }
    return SimulationState(step=step, cells=cells, metrics=metrics)


def test_reporter_tracks_convergence_and_peak(tmp_path):
    reporter = Reporter("test.yaml", 5, 0.7)
    reporter.update(_state(1, segregation=0.5))
    reporter.update(_state(2, segregation=0.8))
    reporter.update(_state(3, unsatisfied=0, moved=0, segregation=0.75))

    assert reporter.initial_segregation == 0.5
    assert reporter.peak_segregation == 0.8
    assert reporter.converged_at == 3
    assert reporter.total_moves == 4

    report = reporter.generate_summary(_state(3, unsatisfied=0, moved=0),
                                       tmp_path, True, False)
    assert "SCHELLING SEGREGATION SIMULATION REPORT" in report
    assert "[X] Converged: no unsatisfied agents at step 3" in report
    assert "Random Seed: 5" in report
    assert "Animation:  (disabled)" in report


def test_reporter_without_convergence(tmp_path):
    reporter = Reporter("defaults", None, 0.3)
    reporter.update(_state(1))
    report = reporter.generate_summary(_state(1), tmp_path, False, False)
    assert "[ ] Converged" in report
    assert "None (random)" in report
    assert "Snapshot:   (disabled)" in report


def test_render_rgb_uses_cell_colours():
    image = Visualizer(2).render_rgb(_state(0))
    assert image.shape == (2, 2, 3)
    assert tuple(image[1, 0]) == (255, 255, 255)   # empty
    assert image[0, 0, 0] > image[0, 0, 2]          # type A is red
    assert image[0, 1, 2] > image[0, 1, 0]          # type B is blue


def test_snapshot_and_gif_written(tmp_path):
    visualizer = Visualizer(2)
    visualizer.save_snapshot(_state(1), tmp_path / "shot.png")
    assert (tmp_path / "shot.png").stat().st_size > 0

    visualizer.buffer_frame(_state(1))
    visualizer.buffer_frame(_state(2))
    visualizer.generate_gif(tmp_path / "run.gif", fps=5)
    assert (tmp_path / "run.gif").exists()

    visualizer.clear_frames()
    assert visualizer.frames == []
