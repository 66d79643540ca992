"""Dominant colour palette via fixed-budget k-means in RGB space.

Seeds k centroids from random samples (with replacement), then runs
exactly --iterations assignment/update steps. Clusters are reported in
centroid order with their share of the sampled pixels. Empty clusters
keep their seed colour and report 0%.

Pass --seed for reproducible output.

Example:
    uv run palette-tool palette photo.jpg -k 5 -i 10
    uv run palette-tool palette photo.jpg --seed 7 --json
"""

import numpy as np

from palette_tool.core.quantizer import quantize
from palette_tool.core.types import Report, SampledImage, Technique

technique = Technique(
    name='palette',
    help='Extract k dominant colours with their percentages (k-means).',
)


@technique.run
def run(image: SampledImage, report: Report, args) -> None:
    seed = getattr(args, 'seed', None)
    rng = np.random.default_rng(seed)
    result = quantize(
        image.samples,
        k=args.clusters,
        max_iterations=args.iterations,
        rng=rng,
    )
    report.result = result
    report.add('palette', {'seed': seed})
