"""Run every technique, combine into a single report.

Runs: palette, swatches.

Example:
    uv run palette-tool all photo.jpg -o ./out --json
"""

from palette_tool.core.types import Report, SampledImage, Technique

technique = Technique(
    name='all',
    help='Run every technique. Combine into a single report.',
)

ORDER = ['palette', 'swatches']


@technique.run
def run(image: SampledImage, report: Report, args) -> None:
    from palette_tool.registry import all_techniques

    techniques = all_techniques()
    for name in ORDER:
        techniques[name].execute(image, report, args)
