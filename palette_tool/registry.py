"""Technique lookup for the palette-tool CLI.

Every non-private module in palette_tool/techniques/ that defines a
module-level `technique` (a Technique) becomes a subcommand named after
it. Modules are imported on first lookup and cached.
"""

import importlib
import pkgutil

import palette_tool.techniques
from palette_tool.core.types import Technique

_registry: dict[str, Technique] = {}


def discover() -> dict[str, Technique]:
    """Import the technique modules once and return name -> Technique."""
    if not _registry:
        for info in pkgutil.iter_modules(palette_tool.techniques.__path__):
            if info.name.startswith('_'):
                continue
            module = importlib.import_module(f'palette_tool.techniques.{info.name}')
            tech = getattr(module, 'technique', None)
            if isinstance(tech, Technique):
                _registry[tech.name] = tech
    return _registry


def get(name: str) -> Technique:
    """Get a technique by name; KeyError lists what is available."""
    reg = discover()
    if name not in reg:
        raise KeyError(f'Unknown technique: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name]


def all_techniques() -> dict[str, Technique]:
    return discover()
