"""palette-tool — Extract dominant colour palettes from images.

Usage: uv run palette-tool <technique> <image> [options]

Techniques are auto-discovered from palette_tool/techniques/.
Each technique module's docstring is its documentation.
Run `palette-tool help <technique>` for full module docs.

Configuration:
  CLI flags win. Otherwise PALETTE_CLUSTERS, PALETTE_MAX_ITERATIONS,
  PALETTE_MAX_WIDTH and PALETTE_SEED are read from the OS environment,
  then from a .env file found by walking up from the current directory
  (stopping at the nearest .git boundary). Use --env-file to point at a
  .env explicitly.
"""

import argparse
import importlib
import sys

from PIL import UnidentifiedImageError

from palette_tool import registry
from palette_tool.core.config import Settings, check_seed, load_env
from palette_tool.core.errors import InvalidInput
from palette_tool.core.report import format_json, format_text
from palette_tool.core.sampler import sample_image
from palette_tool.core.types import Report


def _load_technique_module(name: str) -> object:
    """Load the raw module for a technique (for docstring access)."""
    return importlib.import_module(f'palette_tool.techniques.{name}')


def _short_help(name: str, fallback: str) -> str:
    doc = (_load_technique_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    techniques = registry.all_techniques()

    epilog = (
        'Examples:\n'
        '  palette-tool palette photo.jpg\n'
        '  palette-tool palette photo.jpg -k 8 -i 20 --seed 42 --json\n'
        '  palette-tool swatches photo.jpg -o ./out\n'
        '  palette-tool all photo.jpg -o ./out --json\n'
        '  palette-tool help palette\n'
    )
    parser = argparse.ArgumentParser(
        prog='palette-tool',
        description='Extract dominant colour palettes from images.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='technique', help='Technique to run')

    for name, tech in sorted(techniques.items()):
        p = sub.add_parser(name, help=_short_help(name, tech.help))
        p.add_argument('image', help='Path to image (any format PIL can open)')
        p.add_argument('-k', '--clusters', type=int, default=None, help='Number of colours (default 5)')
        p.add_argument('-i', '--iterations', type=int, default=None, help='Refinement steps (default 10)')
        p.add_argument(
            '-w',
            '--max-width',
            type=int,
            default=None,
            help='Downsample images wider than this before sampling (default 200)',
        )
        p.add_argument('-s', '--seed', type=int, default=None, help='Seed for centroid selection')
        p.add_argument('-o', '--out-dir', default='.', help='Directory for rendered artefacts (default .)')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')

    help_parser = sub.add_parser('help', help='Print full docs for a technique')
    help_parser.add_argument('command', nargs='?', help='Technique name')

    return parser


def _print_help(command: str | None) -> None:
    """Print full module docstring for a technique."""
    techniques = registry.all_techniques()

    if command is None:
        print('Available techniques:\n')
        for name, tech in sorted(techniques.items()):
            print(f'  {name:<10} {_short_help(name, tech.help)}')
        print('\nRun: palette-tool help <technique> for full docs.')
        return

    if command not in techniques:
        print(f'Unknown technique: {command}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(techniques))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_technique_module(command).__doc__ or '').strip()
    print(doc if doc else f'(No module docs for {command!r})')


def _apply_settings(args: argparse.Namespace, settings: Settings) -> None:
    """Fill unset CLI options from configuration."""
    if args.clusters is None:
        args.clusters = settings.clusters
    if args.iterations is None:
        args.iterations = settings.max_iterations
    if args.max_width is None:
        args.max_width = settings.max_width
    if args.seed is None:
        args.seed = settings.seed
    check_seed(args.seed)


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else — OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'palette-tool: loaded {env_path}', file=sys.stderr)

    if not args.technique:
        parser.print_help()
        sys.exit(1)

    if args.technique == 'help':
        _print_help(args.command)
        return

    try:
        _apply_settings(args, Settings.from_env())
        image = sample_image(args.image, max_width=args.max_width)

        report = Report(
            image_path=args.image,
            image_width=image.width,
            image_height=image.height,
            sample_count=len(image.samples),
        )
        registry.get(args.technique).execute(image, report, args)
    except (InvalidInput, FileNotFoundError, UnidentifiedImageError) as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))


if __name__ == '__main__':
    main()
