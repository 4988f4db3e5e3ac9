"""Render grouped activity as bar chart images (PNG or SVG)."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional, Sequence

import numpy as np
from matplotlib.figure import Figure

from ..activity.grouping import GroupBy, group, normalize, ordered_series, series_values
from ..activity.models import CombinedCommitActivity, Dimension, Mode
from ..exceptions import InvalidConfigError, RenderError
from ..logging_config import get_logger
from .palette import color_for

logger = get_logger(__name__)

SUPPORTED_FORMATS = ("png", "svg")

Series = Mapping[str, Sequence[tuple[str, float]]]


def chart_filename(
    output_prefix: str,
    dimension: Dimension,
    fmt: str,
    group_by: GroupBy = GroupBy.FLAT,
    grouped: bool = False,
) -> str:
    """``{prefix}_by_{dimension}[_{groupBy}][_grouped].{fmt}``"""
    parts = [output_prefix, Dimension.parse(dimension).file_suffix]
    suffix = GroupBy.parse(group_by).file_suffix
    if suffix:
        parts.append(suffix)
    if grouped:
        parts.append("grouped")
    return f"{'_'.join(parts)}.{fmt}"


def render_stacked_bar_chart(
    series: Series,
    title: str,
    x_label: str,
    y_label: str,
    path: str | Path,
    categories: Optional[Sequence[str]] = None,
) -> Path:
    """One bar per category, series stacked bottom-up in lexicographic key order."""
    path = _output_path(path)
    categories = _categories(series, categories, path)

    fig = Figure(figsize=(15, 6))
    ax = fig.add_subplot()
    positions = np.arange(len(categories))
    bottom = np.zeros(len(categories))

    for i, key in enumerate(sorted(series)):
        values = np.array([value for _, value in series[key]], dtype=float)
        ax.bar(positions, values, 0.8, bottom=bottom, label=key, color=color_for(i), linewidth=0)
        bottom += values

    _decorate(ax, positions, categories, title, x_label, y_label, has_series=bool(series))
    return _save(fig, path)


def render_grouped_bar_chart(
    series: Series,
    title: str,
    x_label: str,
    y_label: str,
    path: str | Path,
    categories: Optional[Sequence[str]] = None,
) -> Path:
    """Series side by side within each category."""
    path = _output_path(path)
    categories = _categories(series, categories, path)

    fig = Figure(figsize=(14, 6))
    ax = fig.add_subplot()
    positions = np.arange(len(categories))
    keys = sorted(series)
    width = 0.8 / max(len(keys), 1)

    for i, key in enumerate(keys):
        values = np.array([value for _, value in series[key]], dtype=float)
        offset = (i - (len(keys) - 1) / 2) * width
        ax.bar(positions + offset, values, width, label=key, color=color_for(i), linewidth=0)

    _decorate(ax, positions, categories, title, x_label, y_label, has_series=bool(keys))
    return _save(fig, path)


def generate_charts(
    combined: CombinedCommitActivity,
    mode: Mode,
    group_by: GroupBy,
    output_prefix: str,
    fmt: str,
    grouped: bool = False,
    output_dir: str | Path = ".",
) -> list[Path]:
    """Write one chart per dimension; a RenderError stops the remaining ones.

    Stacked charts show raw values. Grouped charts put series side by side
    and scale each series to proportions of its own total so repositories
    or developers of very different size can be compared.
    """
    mode = Mode.parse(mode)
    group_by = GroupBy.parse(group_by)
    fmt = str(fmt).lower()
    if fmt not in SUPPORTED_FORMATS:
        raise InvalidConfigError(
            "output_format", fmt, f"expected one of {', '.join(SUPPORTED_FORMATS)}"
        )
    logger.info(
        "Generating charts: prefix=%s format=%s mode=%s group_by=%s grouped=%s",
        output_prefix,
        fmt,
        mode.value,
        group_by.value,
        grouped,
    )
    output_dir = Path(output_dir)
    written = []

    for dimension in Dimension:
        data = group(combined, dimension, group_by)
        path = output_dir / chart_filename(output_prefix, dimension, fmt, group_by, grouped)
        title = dimension.title
        if group_by is not GroupBy.FLAT:
            title = f"{title} ({group_by.value})"

        if grouped:
            proportions = normalize(data)
            series = {
                key: [(label, proportions[key][label]) for label in dimension.labels]
                for key in ordered_series(proportions)
            }
            render_grouped_bar_chart(
                series,
                f"Normalized {title}",
                dimension.x_label,
                "Proportion",
                path,
                categories=dimension.labels,
            )
        else:
            render_stacked_bar_chart(
                series_values(data, dimension),
                title,
                dimension.x_label,
                mode.unit_label,
                path,
                categories=dimension.labels,
            )
        logger.info("Saved %s chart as %s", dimension.value, path)
        written.append(path)

    return written


def _output_path(path: str | Path) -> Path:
    path = Path(path)
    if path.suffix.lstrip(".").lower() not in SUPPORTED_FORMATS:
        raise RenderError(path, f"unsupported format, expected one of {', '.join(SUPPORTED_FORMATS)}")
    return path


def _categories(series: Series, categories: Optional[Sequence[str]], path: Path) -> list[str]:
    if categories is None:
        if not series:
            raise RenderError(path, "no series and no categories to plot")
        first = ordered_series(series)[0]
        categories = [label for label, _ in series[first]]
    categories = list(categories)
    for key, values in series.items():
        if len(values) != len(categories):
            raise RenderError(
                path,
                f"series {key!r} has {len(values)} values for {len(categories)} categories",
            )
    return categories


def _decorate(ax, positions, categories, title, x_label, y_label, has_series: bool) -> None:
    ax.set_title(title)
    ax.set_xlabel(x_label)
    ax.set_ylabel(y_label)
    ax.set_xticks(positions)
    # Hour and week axes are too dense for horizontal labels
    rotation = 45 if len(categories) > 12 else 0
    ax.set_xticklabels(categories, rotation=rotation, ha="right" if rotation else "center")
    if has_series:
        ax.legend(loc="upper right")


def _save(fig: Figure, path: Path) -> Path:
    try:
        fig.savefig(path, format=path.suffix.lstrip(".").lower(), bbox_inches="tight")
    except OSError as e:
        raise RenderError(path, str(e)) from e
    return path
