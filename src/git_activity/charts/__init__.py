"""Chart output: bar charts from grouped activity."""

from .palette import DEFAULT_PALETTE, generate_palette
from .render import (
    SUPPORTED_FORMATS,
    chart_filename,
    generate_charts,
    render_grouped_bar_chart,
    render_stacked_bar_chart,
)

__all__ = [
    "DEFAULT_PALETTE",
    "SUPPORTED_FORMATS",
    "chart_filename",
    "generate_charts",
    "generate_palette",
    "render_grouped_bar_chart",
    "render_stacked_bar_chart",
]
