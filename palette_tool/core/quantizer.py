"""Fixed-budget k-means colour quantization in raw RGB space.

quantize() seeds k centroids by drawing k samples uniformly at random,
with replacement, then runs exactly max_iterations refinement steps:

  1. assignment: each sample goes to the centroid at minimum Euclidean
     distance; ties go to the lowest centroid index.
  2. update: each centroid becomes the floor-divided integer mean of its
     samples. A centroid with no samples keeps its previous position.

There is no early exit on convergence. Percentages are counted from the
labels of the last assignment step, i.e. the labels that produced the
final centroids.

Example:
    result = quantize(samples, k=2, max_iterations=5)
    result.pairs()  # [('#0a141e', 50.0), ('#c8d2dc', 50.0)]
"""

from collections.abc import Sequence

import numpy as np

from palette_tool.core.errors import InvalidInput
from palette_tool.core.types import Cluster, ClusterResult

DEFAULT_K = 5
DEFAULT_MAX_ITERATIONS = 10


def _check_count(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidInput(f'{name} must be an integer, got {value!r}')
    if value < 1:
        raise InvalidInput(f'{name} must be >= 1, got {value}')


def _as_samples(samples) -> np.ndarray:
    """Validate samples and return them as an (N, 3) int64 array."""
    try:
        arr = np.asarray(samples)
    except ValueError:
        raise InvalidInput('samples must be a sequence of RGB triples of equal length') from None
    if arr.size == 0:
        raise InvalidInput('samples must not be empty')
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise InvalidInput(f'samples must be a sequence of RGB triples, got shape {arr.shape}')
    if not np.issubdtype(arr.dtype, np.integer):
        raise InvalidInput(f'sample channels must be integers, got {arr.dtype}')
    arr = arr.astype(np.int64)
    if arr.min() < 0 or arr.max() > 255:
        raise InvalidInput('sample channels must be in [0, 255]')
    return arr


def seed_centroids(
    samples: np.ndarray,
    k: int,
    rng: np.random.Generator | None = None,
    seed_indices: Sequence[int] | None = None,
) -> np.ndarray:
    """Pick k initial centroids from samples, uniformly and with replacement.

    seed_indices, when given, names the samples to use directly and the
    generator is not consulted.
    """
    n = len(samples)
    if seed_indices is not None:
        indices = np.asarray(seed_indices, dtype=np.int64).reshape(-1)
        if len(indices) != k:
            raise InvalidInput(f'seed_indices has {len(indices)} entries, expected k={k}')
        if indices.min() < 0 or indices.max() >= n:
            raise InvalidInput(f'seed_indices must index into {n} samples')
    else:
        if rng is None:
            rng = np.random.default_rng()
        indices = rng.integers(0, n, size=k)
    return samples[indices].copy()


def assign(samples: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Label each sample with the index of its nearest centroid."""
    # squared distances order the same as Euclidean ones and stay exact in int64
    diff = samples[:, None, :] - centroids[None, :, :]
    dist2 = np.einsum('nkc,nkc->nk', diff, diff)
    # argmin returns the first minimum, so ties resolve to the lowest index
    return np.argmin(dist2, axis=1)


def update(samples: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Move each centroid to the floor mean of its samples; empty clusters stay put."""
    k = len(centroids)
    counts = np.bincount(labels, minlength=k)
    sums = np.zeros((k, 3), dtype=np.int64)
    np.add.at(sums, labels, samples)
    occupied = counts > 0
    new = centroids.copy()
    new[occupied] = sums[occupied] // counts[occupied, None]
    return new


def quantize(
    samples,
    k: int = DEFAULT_K,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    rng: np.random.Generator | None = None,
    seed_indices: Sequence[int] | None = None,
) -> ClusterResult:
    """Cluster RGB samples into k colours.

    Args:
        samples: sequence of (r, g, b) integer triples, or an (N, 3) integer array.
        k: number of clusters. May exceed len(samples); seeds repeat then.
        max_iterations: number of assignment/update steps, always run in full.
        rng: numpy Generator used for seeding. Defaults to fresh system entropy.
        seed_indices: explicit sample indices for the k initial centroids.

    Returns:
        ClusterResult with exactly k clusters in centroid-index order.

    Raises:
        InvalidInput: empty or malformed samples, k or max_iterations not an integer >= 1,
            or seed_indices that do not fit.
    """
    _check_count('k', k)
    _check_count('max_iterations', max_iterations)
    data = _as_samples(samples)

    centroids = seed_centroids(data, k, rng=rng, seed_indices=seed_indices)
    labels = np.zeros(len(data), dtype=np.int64)
    for _ in range(max_iterations):
        labels = assign(data, centroids)
        centroids = update(data, labels, centroids)

    counts = np.bincount(labels, minlength=k)
    total = len(data)
    clusters = tuple(
        Cluster(
            rgb=(int(c[0]), int(c[1]), int(c[2])),
            count=int(n),
            percentage=100.0 * int(n) / total,
        )
        for c, n in zip(centroids, counts)
    )
    return ClusterResult(clusters=clusters, total=total, iterations=max_iterations)
