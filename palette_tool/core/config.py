"""Configuration for palette-tool: .env loading and PALETTE_* settings.

Precedence (first wins):
  1. Explicit CLI flags.
  2. Existing OS environment variables. A .env file never overwrites them.
  3. .env file at --env-file, or the first .env found walking up from cwd.
     The walk stops at the directory holding .git (file or dir).
  4. Built-in defaults.

Variables:
  PALETTE_CLUSTERS        number of clusters k (default 5)
  PALETTE_MAX_ITERATIONS  refinement steps (default 10)
  PALETTE_MAX_WIDTH       sampler width bound in pixels (default 200)
  PALETTE_SEED            integer seed for centroid seeding (default: unset)
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from palette_tool.core.errors import InvalidInput
from palette_tool.core.quantizer import DEFAULT_K, DEFAULT_MAX_ITERATIONS
from palette_tool.core.sampler import DEFAULT_MAX_WIDTH


def find_dotenv(start: Path) -> Path | None:
    """Return the nearest .env at or above start, without crossing a .git boundary."""
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / '.env'
        if candidate.is_file():
            return candidate
        if (directory / '.git').exists():
            return None
    return None


def parse_dotenv(path: Path) -> dict[str, str]:
    """KEY=value lines; quotes stripped, blanks and # comments skipped."""
    values: dict[str, str] = {}
    for raw in path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, value = line.partition('=')
        key = key.strip()
        if key:
            values[key] = value.strip().strip('"').strip("'")
    return values


def load_env(env_file: str | None = None) -> Path | None:
    """Copy .env values into os.environ for keys not already set.

    Returns the file that was loaded, or None.
    """
    if env_file:
        path: Path | None = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def _int_setting(env: Mapping[str, str], name: str, default: int | None) -> int | None:
    raw = env.get(name, '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidInput(f'{name} must be an integer, got {raw!r}') from None


def check_seed(seed: int | None) -> int | None:
    """numpy generators only accept non-negative seeds."""
    if seed is not None and seed < 0:
        raise InvalidInput(f'seed must be >= 0, got {seed}')
    return seed


@dataclass(frozen=True)
class Settings:
    clusters: int = DEFAULT_K
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    max_width: int = DEFAULT_MAX_WIDTH
    seed: int | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> 'Settings':
        """Read PALETTE_* variables, falling back to defaults."""
        env = os.environ if env is None else env
        return cls(
            clusters=_int_setting(env, 'PALETTE_CLUSTERS', DEFAULT_K),
            max_iterations=_int_setting(env, 'PALETTE_MAX_ITERATIONS', DEFAULT_MAX_ITERATIONS),
            max_width=_int_setting(env, 'PALETTE_MAX_WIDTH', DEFAULT_MAX_WIDTH),
            seed=check_seed(_int_setting(env, 'PALETTE_SEED', None)),
        )
