"""Report builder — text and JSON output for palette-tool results."""

import json
from typing import Any

from palette_tool.core.types import Report

BAR_WIDTH = 40


def _bar(pct: float, width: int = BAR_WIDTH) -> str:
    filled = round(pct / 100 * width)
    return '█' * filled + '·' * (width - filled)


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    dim = f'{report.image_width}×{report.image_height}'
    header = f'palette-tool: {report.image_path} ({dim}, {report.sample_count} samples)'
    lines.append(header)

    result = report.result
    if result is not None:
        lines.append(f'k={len(result)}  iterations={result.iterations}')
        lines.append('')
        for i, cluster in enumerate(result, start=1):
            lines.append(f'  {i:>2}  {cluster.hex}  {cluster.percentage:6.2f}%  {_bar(cluster.percentage)}')

    for tech_name, tech_data in report.techniques.items():
        if tech_name == 'palette':
            continue  # rendered above
        if tech_name == 'swatches' and 'file' in tech_data:
            lines.append('')
            lines.append(f'swatches: {tech_data["file"]}')
        else:
            for k, v in tech_data.items():
                lines.append(f'  {tech_name}.{k}: {v}')

    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'image': report.image_path,
        'dimensions': {'width': report.image_width, 'height': report.image_height},
        'samples': report.sample_count,
    }
    if report.result is not None:
        obj['k'] = len(report.result)
        obj['iterations'] = report.result.iterations
        obj['clusters'] = [c.to_dict() for c in report.result]

    for tech_name, tech_data in report.techniques.items():
        if tech_name != 'palette':
            obj[tech_name] = tech_data
    return json.dumps(obj, indent=2)
