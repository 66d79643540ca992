"""Shared types for palette-tool: ColorSample, Cluster, ClusterResult, SampledImage, Technique, Report."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from palette_tool.core.colour import rgb_to_hex

ColorSample = tuple[int, int, int]


@dataclass(frozen=True)
class Cluster:
    """One palette entry: the final centroid and its share of the samples."""

    rgb: ColorSample
    count: int
    percentage: float  # 100 * count / total samples

    @property
    def hex(self) -> str:
        return rgb_to_hex(*self.rgb)

    def to_dict(self) -> dict[str, Any]:
        return {
            'hex': self.hex,
            'rgb': list(self.rgb),
            'count': self.count,
            'pct': self.percentage,
        }


@dataclass(frozen=True)
class ClusterResult:
    """Quantizer output, in centroid-index order (not sorted by population)."""

    clusters: tuple[Cluster, ...]
    total: int  # number of samples clustered
    iterations: int  # refinement steps run

    def __len__(self) -> int:
        return len(self.clusters)

    def __iter__(self):
        return iter(self.clusters)

    def pairs(self) -> list[tuple[str, float]]:
        """(hexColorString, percentage) pairs for presentation."""
        return [(c.hex, c.percentage) for c in self.clusters]

    @property
    def centroids(self) -> list[ColorSample]:
        return [c.rgb for c in self.clusters]

    @property
    def percentages(self) -> list[float]:
        return [c.percentage for c in self.clusters]


@dataclass
class SampledImage:
    """Pixel samples taken from an image, ready for quantization."""

    path: str
    width: int  # sampled (downscaled) width
    height: int
    samples: np.ndarray  # (N, 3) uint8, row-major pixel order


class Technique:
    """A self-registering analysis technique.

    Usage in a technique module:

        technique = Technique(name='palette', help='Extract dominant colours')

        @technique.run
        def run(image, report, args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, image: SampledImage, report: Report, args: Any) -> None:
        """Execute the technique's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Technique {self.name} has no run function')
        self._run_fn(image, report, args)


@dataclass
class Report:
    """Accumulates results from techniques for text/JSON output."""

    image_path: str = ''
    image_width: int = 0
    image_height: int = 0
    sample_count: int = 0
    result: ClusterResult | None = None
    techniques: dict[str, dict[str, Any]] = field(default_factory=dict)

    def add(self, technique_name: str, data: dict[str, Any]) -> None:
        """Add (or merge) technique results."""
        self.techniques.setdefault(technique_name, {}).update(data)
