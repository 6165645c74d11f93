# charts are written to files, so use a backend that never opens a window
import matplotlib
matplotlib.use('Agg')
# import matplotlib to visualize stats
import matplotlib.pyplot as plt
import io
import numpy as np
import pandas as pd
from dataclasses import dataclass
from pathlib import Path
# import scipy for the kernel density estimate
from scipy.stats import gaussian_kde

from court import court_lines, court_limits


@dataclass(frozen=True)
class ReferenceMarker:
    label: str
    value: float
    color: str = 'red'
    # 'x' draws a vertical line at value, 'y' a horizontal one
    axis: str = 'x'

    def __post_init__(self):
        if self.axis not in ('x', 'y'):
            raise ValueError(f"marker axis must be 'x' or 'y', got '{self.axis}'")


# this function makes sure every column a chart needs is in the table
def _require(df, *columns):
    for column in columns:
        if column not in df.columns:
            raise KeyError(f"column '{column}' not found, available: {df.columns.tolist()}")


def _numeric(df, column):
    return pd.to_numeric(df[column], errors='coerce')


def _draw_markers(ax, markers):
    for marker in markers:
        if marker.axis == 'x':
            ax.axvline(marker.value, color=marker.color, linestyle='--', linewidth=1.5, label=marker.label)
        else:
            ax.axhline(marker.value, color=marker.color, linestyle='--', linewidth=1.5, label=marker.label)
    if markers:
        ax.legend(loc='best', fontsize=9)


def _label(ax, title, xlabel, ylabel):
    if title:
        ax.set_title(title)
    if xlabel:
        ax.set_xlabel(xlabel)
    if ylabel:
        ax.set_ylabel(ylabel)


# this function saves the figure to output (or to PNG bytes when output is None) and always closes it
def _finish(fig, output, dpi):
    try:
        fig.tight_layout()
        if output is None:
            buf = io.BytesIO()
            fig.savefig(buf, format='png', dpi=dpi)
            return buf.getvalue()
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output, dpi=dpi)
        return output
    finally:
        plt.close(fig)


# this function returns bin edges of width bin_width that cover every value
def histogram_bins(values, bin_width):
    if bin_width <= 0:
        raise ValueError(f"bin width must be positive, got {bin_width}")
    values = pd.Series(values, dtype=float).dropna()
    if values.empty:
        return np.array([0.0, bin_width])
    start = np.floor(values.min() / bin_width) * bin_width
    # count bins with integer steps; float steps can leave the last edge just under the max
    n = max(int(np.ceil((values.max() - start) / bin_width)), 1)
    edges = start + bin_width * np.arange(n + 1)
    edges[0] = min(edges[0], values.min())
    edges[-1] = max(edges[-1], values.max())
    return edges


def histogram(df, column, bin_width, markers=(), title=None, xlabel=None, ylabel='count',
              color='steelblue', output=None, dpi=100):
    _require(df, column)
    values = _numeric(df, column).dropna()
    bins = histogram_bins(values, bin_width)

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.hist(values, bins=bins, color=color, edgecolor='white')
    _draw_markers(ax, markers)
    _label(ax, title, xlabel or column, ylabel)
    return _finish(fig, output, dpi)


def density(df, column, markers=(), points=200, title=None, xlabel=None, ylabel='density',
            color='steelblue', output=None, dpi=100):
    """Gaussian kernel density estimate of one column."""
    _require(df, column)
    values = _numeric(df, column).dropna()
    if values.nunique() < 2:
        raise ValueError(f"need at least two distinct values in '{column}' for a density curve")

    kde = gaussian_kde(values.to_numpy())
    pad = (values.max() - values.min()) * 0.1
    grid = np.linspace(values.min() - pad, values.max() + pad, points)
    curve = kde(grid)

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(grid, curve, color=color)
    ax.fill_between(grid, curve, color=color, alpha=0.3)
    _draw_markers(ax, markers)
    _label(ax, title, xlabel or column, ylabel)
    return _finish(fig, output, dpi)


# this function resolves alpha/size given as either a constant or a column name
def _per_point(df, value, scale=1.0):
    if isinstance(value, str):
        _require(df, value)
        return _numeric(df, value).fillna(0).to_numpy() * scale
    return value


def scatter(df, x, y, alpha=0.7, size=20, size_scale=1.0, color='steelblue', markers=(),
            title=None, xlabel=None, ylabel=None, output=None, dpi=100):
    """
    Scatter plot of two columns.

    alpha and size can each be a constant or the name of a column. A column
    used for alpha is divided by its maximum so every point lands in [0, 1];
    a column used for size is multiplied by size_scale.
    """
    _require(df, x, y)
    if isinstance(alpha, str):
        raw = _per_point(df, alpha)
        top = raw.max() if len(raw) else 0
        alpha = raw / top if top > 0 else np.ones_like(raw)
    sizes = _per_point(df, size, scale=size_scale)

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.scatter(_numeric(df, x), _numeric(df, y), s=sizes, alpha=alpha, color=color, edgecolors='none')
    _draw_markers(ax, markers)
    _label(ax, title, xlabel or x, ylabel or y)
    return _finish(fig, output, dpi)


# this function draws the half court lines onto an axis
def draw_court(ax, color='black', linewidth=1.0):
    for line in court_lines():
        ax.plot(line.x, line.y, color=color, linewidth=linewidth)
    (xmin, xmax), (ymin, ymax) = court_limits()
    ax.set_xlim(xmin, xmax)
    ax.set_ylim(ymin, ymax)
    ax.set_aspect('equal')
    ax.set_xticks([])
    ax.set_yticks([])
    return ax


def court_overlay(first, second, x='x', y='y', labels=('first', 'second'), colors=('tab:blue', 'tab:orange'),
                  alpha=0.5, size=15, title=None, output=None, dpi=100):
    """Plot two shot sets in different colors over the court diagram."""
    _require(first, x, y)
    _require(second, x, y)

    fig, ax = plt.subplots(figsize=(8, 7.5))
    draw_court(ax)
    for shots, label, color in zip((first, second), labels, colors):
        ax.scatter(_numeric(shots, x), _numeric(shots, y), s=size, alpha=alpha, color=color,
                   label=f"{label} ({len(shots)})", zorder=3)
    ax.legend(loc='upper right', fontsize=9)
    _label(ax, title, None, None)
    return _finish(fig, output, dpi)
