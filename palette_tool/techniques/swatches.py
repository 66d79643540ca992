"""Render the palette as a PNG strip.

One block per cluster, in centroid order, each block as wide as its
percentage of the strip. Each block wide enough for text carries its hex
label in black or white, whichever reads better. Runs the palette
technique first if it has not run yet.

Writes <out_dir>/<image stem>_palette.png.

Example:
    uv run palette-tool swatches photo.jpg -o ./out
"""

import os

from PIL import Image, ImageDraw

from palette_tool.core.colour import text_colour_for
from palette_tool.core.types import ClusterResult, Report, SampledImage, Technique

technique = Technique(
    name='swatches',
    help='Render the palette as a PNG strip sized by percentage.',
)

STRIP_WIDTH = 800
STRIP_HEIGHT = 120
LABEL_MIN_WIDTH = 60


def render(result: ClusterResult, width: int = STRIP_WIDTH, height: int = STRIP_HEIGHT) -> Image.Image:
    """Draw result as a horizontal strip."""
    strip = Image.new('RGB', (width, height), (255, 255, 255))
    draw = ImageDraw.Draw(strip)
    x = 0.0
    for cluster in result:
        if cluster.count == 0:
            continue
        x2 = x + cluster.percentage / 100 * width
        left, right = round(x), round(x2)
        if right > left:
            draw.rectangle([left, 0, right - 1, height - 1], fill=cluster.rgb)
            if right - left >= LABEL_MIN_WIDTH:
                draw.text((left + 4, height - 16), cluster.hex, fill=text_colour_for(cluster.rgb))
        x = x2
    return strip


@technique.run
def run(image: SampledImage, report: Report, args) -> None:
    if report.result is None:
        from palette_tool.registry import get

        get('palette').execute(image, report, args)

    os.makedirs(args.out_dir, exist_ok=True)
    stem = os.path.splitext(os.path.basename(image.path))[0] or 'image'
    path = os.path.join(args.out_dir, f'{stem}_palette.png')
    render(report.result).save(path)
    report.add('swatches', {'file': path, 'width': STRIP_WIDTH, 'height': STRIP_HEIGHT})
