"""Configuration dataclasses and YAML loader for Schelling CA simulation."""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from pathlib import Path
import yaml


@dataclass
class DistributionConfig:
    frac_a: float = 0.4      # share of type A agents
    frac_b: float = 0.4      # share of type B agents
    frac_empty: float = 0.2  # share of vacancies


@dataclass
class WorldConfig:
    total_cells: int = 90000  # side = floor(sqrt(total_cells))
    distribution: DistributionConfig = field(default_factory=DistributionConfig)


@dataclass
class SimulationConfig:
    world: WorldConfig = field(default_factory=WorldConfig)
    threshold: float = 0.7
    max_steps: int = 200

    # Export flags (can be overridden by CLI)
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    gif_every: int = 5
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))


_DISTRIBUTION_KEYS = {'a': 'frac_a', 'b': 'frac_b', 'empty': 'frac_empty'}


def default_config() -> SimulationConfig:
    """Classic parameters: 300x300 world, 40/40/20 split, threshold 0.7."""
    return SimulationConfig()


def _parse_distribution(dist_raw: Dict[str, Any]) -> DistributionConfig:
    """Parse population fractions from raw YAML data."""
    unknown = set(dist_raw) - set(_DISTRIBUTION_KEYS)
    if unknown:
        raise ValueError(f"Unknown distribution keys: {sorted(unknown)}")
    defaults = DistributionConfig()
    return DistributionConfig(**{
        attr: float(dist_raw.get(key, getattr(defaults, attr)))
        for key, attr in _DISTRIBUTION_KEYS.items()
    })


def load_config(config_path: Path) -> SimulationConfig:
    """Load YAML configuration file; missing sections keep their defaults."""
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    defaults = default_config()

    # Parse world config
    world_raw = raw.get('world', {})
    world = WorldConfig(
        total_cells=int(world_raw.get('total_cells', defaults.world.total_cells)),
        distribution=_parse_distribution(world_raw.get('distribution', {}))
    )

    # Parse simulation config
    sim_raw = raw.get('simulation', {})

    # Parse export config (optional)
    export_raw = raw.get('export', {})

    gif_every = int(export_raw.get('gif_every', defaults.gif_every))
    if gif_every < 1:
        raise ValueError(f"export.gif_every must be at least 1, got {gif_every}")

    return SimulationConfig(
        world=world,
        threshold=float(sim_raw.get('threshold', defaults.threshold)),
        max_steps=int(sim_raw.get('max_steps', defaults.max_steps)),
        seed=sim_raw.get('seed', defaults.seed),
        snapshot_enabled=export_raw.get('snapshot', defaults.snapshot_enabled),
        gif_enabled=export_raw.get('gif', defaults.gif_enabled),
        gif_every=gif_every
    )
