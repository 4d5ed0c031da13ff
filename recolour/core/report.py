"""Report builder — palette usage census plus text and JSON output for recolour-tool."""

import json
import os
from typing import Any

import numpy as np

from recolour.core.types import TRANSPARENT, Color, ConversionReport, Palette, Raster


def palette_usage(raster: Raster, palette: Palette) -> tuple[list[dict[str, Any]], float]:
    """Count pixels per palette entry.

    Returns (entries sorted by count descending, transparent percentage).
    Pixels that are neither transparent nor in the palette are counted as
    '(other)', which only happens for rasters that were not quantized.
    """
    total = raster.pixel_count
    if total == 0:
        return [], 0.0

    distinct, counts = np.unique(raster.pixels.reshape(-1, 4), axis=0, return_counts=True)
    index_of: dict[Color, int] = {}
    for i, colour in enumerate(palette):
        index_of.setdefault(colour, i)

    per_name: dict[str, dict[str, Any]] = {}
    transparent = 0
    for row, count in zip(distinct, counts, strict=True):
        colour = Color(*(int(v) for v in row))
        if colour == TRANSPARENT:
            transparent += int(count)
            continue
        idx = index_of.get(colour)
        name = palette.name_of(idx) if idx is not None else '(other)'
        entry = per_name.setdefault(name, {'name': name, 'hex': colour.hex, 'count': 0})
        entry['count'] += int(count)

    usage = sorted(per_name.values(), key=lambda e: -e['count'])
    for entry in usage:
        entry['pct'] = round(entry['count'] / total * 100, 1)
    return usage, round(transparent / total * 100, 1)


def format_text(report: ConversionReport) -> str:
    """Format report as human-readable text."""
    lines = []
    src = f'{report.source_width}×{report.source_height}'
    dst = f'{report.target_width}×{report.target_height}'
    box = f'{report.box[0]}×{report.box[1]}'
    lines.append(f'recolour-tool: {report.source} ({src}) → {dst} in box {box}')
    if report.output_path:
        lines.append(f'  output: {os.path.basename(report.output_path)}')
    lines.append(f'  resampler: {report.resampler}')
    lines.append(
        f'  colours: {report.distinct_before} distinct after resize → '
        f'{report.distinct_after} of {report.palette_size} palette entries'
    )
    if report.transparent_pct:
        lines.append(f'  transparent: {report.transparent_pct:.1f}%')
    if report.usage:
        top = report.usage[:5]
        parts = [f'{u["name"]}:{u["pct"]:.1f}%' for u in top]
        lines.append(f'  census: {", ".join(parts)}')
    return '\n'.join(lines)


def format_json(report: ConversionReport) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'source': report.source,
        'source_dimensions': {'width': report.source_width, 'height': report.source_height},
        'box': {'width': report.box[0], 'height': report.box[1]},
        'dimensions': {'width': report.target_width, 'height': report.target_height},
        'resampler': report.resampler,
        'palette_size': report.palette_size,
        'distinct_before': report.distinct_before,
        'distinct_after': report.distinct_after,
        'transparent_pct': report.transparent_pct,
        'usage': report.usage,
    }
    if report.output_path:
        obj['output'] = report.output_path
    return json.dumps(obj, indent=2)
