#!/usr/bin/env python3
"""
Schelling Segregation Cellular Automata Simulation

Agents of two types relocate to random vacancies while the share of
like-typed neighbours around them is below a threshold.

Usage:
    schelling-ca [--config configs/schelling.yaml] [options]

Examples:
    schelling-ca
    schelling-ca --config configs/schelling.yaml --gif --out-dir results/
    schelling-ca --threshold 0.5 --steps 50 --no-snapshot
    schelling-ca --config configs/schelling.yaml --seed 42
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import default_config, load_config
from .model.engine import SimulationEngine
from .model.errors import SimulationError
from .export.visualizer import Visualizer
from .export.reporter import Reporter


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Schelling Segregation Cellular Automata Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    schelling-ca
    schelling-ca --config configs/schelling.yaml --gif --out-dir results/
    schelling-ca --threshold 0.5 --steps 50 --no-snapshot
    schelling-ca --config configs/schelling.yaml --seed 42
        """
    )

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file (default: built-in)')

    # Optional overrides
    parser.add_argument('--steps', type=int, default=None,
                        help='Override max simulation steps')
    parser.add_argument('--threshold', type=float, default=None,
                        help='Override satisfaction threshold (0.0-1.0)')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Load configuration
    if args.config is None:
        config = default_config()
    else:
        try:
            config = load_config(args.config)
        except FileNotFoundError:
            print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
            return 1
        except Exception as e:
            print(f"Error loading config: {e}", file=sys.stderr)
            return 1

    # Apply CLI overrides
    if args.steps is not None:
        config.max_steps = args.steps
    if args.threshold is not None:
        config.threshold = args.threshold
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir

    # Initialize engine
    try:
        engine = SimulationEngine(config)
    except (SimulationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    size = engine.grid.size()
    if not config.quiet:
        counts = engine.get_summary()
        print(f"Initializing simulation...")
        print(f"  Grid: {size}x{size}")
        print(f"  Population: {counts['type_a']} A, {counts['type_b']} B, "
              f"{counts['empty']} empty")
        print(f"  Threshold: {config.threshold}")
        print(f"  Max steps: {config.max_steps}")

    visualizer = Visualizer(size)
    label = str(args.config) if args.config else '(built-in defaults)'
    reporter = Reporter(label, config.seed, config.threshold)

    if config.gif_enabled:
        visualizer.buffer_frame(engine.snapshot())

    # Main simulation loop
    if not config.quiet:
        print(f"\nRunning simulation...")

    final_state = None
    try:
        while not engine.is_finished():
            state = engine.step()
            final_state = state

            # Buffer GIF frame (every N steps to reduce memory)
            if config.gif_enabled:
                if state.step % config.gif_every == 0 or engine.is_finished():
                    visualizer.buffer_frame(state)

            # Update reporter
            reporter.update(state)

            # Progress indicator
            if not config.quiet and state.step % 10 == 0:
                print(f"  Step {state.step}: {state.metrics['moved']} moved, "
                      f"{state.metrics['satisfied_fraction']:.1%} satisfied")

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")

    # Final exports
    if config.snapshot_enabled and final_state:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        gif_path = config.out_dir / 'simulation.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path, fps=10)
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    # Print summary report
    if not config.quiet and final_state:
        report = reporter.generate_summary(
            final_state,
            config.out_dir,
            config.snapshot_enabled,
            config.gif_enabled
        )
        print(report)

    return 0


if __name__ == '__main__':
    sys.exit(main())
