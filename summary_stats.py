# import numpy for NaN
import numpy as np
# import pandas to work with tabular data
import pandas as pd
from dataclasses import dataclass
from typing import List

# percentiles reported as the five-number summary
QUARTILE_LEVELS = (0, 25, 50, 75, 100)
# fence multiplier for the Tukey rule
TUKEY_K = 1.5


# this function turns any sequence (list, Series, column) into a float Series without missing values
def _clean(values):
    if not isinstance(values, pd.Series):
        values = pd.Series(list(values), dtype=float)
    return pd.to_numeric(values, errors='coerce').dropna()


def mean(values):
    return float(_clean(values).mean())


def median(values):
    # middle element for odd counts, average of the two middles for even counts
    return float(_clean(values).median())


def std(values, ddof=1):
    return float(_clean(values).std(ddof=ddof))


# this function returns every value tied for the highest count, smallest first
def mode_all(values) -> List[float]:
    series = _clean(values)
    if series.empty:
        return []
    counts = series.value_counts()
    top = counts.max()
    return sorted(counts[counts == top].index.tolist())


# this function returns a single mode: the smallest of the tied values
def mode_single(values):
    modes = mode_all(values)
    return modes[0] if modes else np.nan


def quartiles(values):
    """0/25/50/75/100th percentiles using linear interpolation, indexed by percent."""
    series = _clean(values)
    levels = [level / 100 for level in QUARTILE_LEVELS]
    result = series.quantile(levels, interpolation='linear')
    result.index = list(QUARTILE_LEVELS)
    return result


def iqr(values):
    q = quartiles(values)
    return float(q[75] - q[25])


# this function returns the (lower, upper) Tukey fences
def tukey_fences(values, k=TUKEY_K):
    q = quartiles(values)
    spread = q[75] - q[25]
    return float(q[25] - k * spread), float(q[75] + k * spread)


# this function flags rows outside [Q1 - k*IQR, Q3 + k*IQR]
def tukey_outliers(df, column, name_column='Player', k=TUKEY_K):
    values = pd.to_numeric(df[column], errors='coerce')
    lower, upper = tukey_fences(values, k=k)
    mask = (values < lower) | (values > upper)
    return df.loc[mask, [name_column, column]].reset_index(drop=True)


# this function flags rows more than n_sigma sample standard deviations away from the mean
def sigma_outliers(df, column, name_column='Player', n_sigma=3, two_sided=False):
    """
    Rows more than n_sigma sample standard deviations above the mean.

    Only the high side is flagged unless two_sided is set, in which case rows
    that far below the mean are flagged as well.
    """
    values = pd.to_numeric(df[column], errors='coerce')
    center = values.mean()
    spread = values.std(ddof=1)
    if pd.isna(spread) or spread == 0:
        return df.iloc[0:0][[name_column, column]].reset_index(drop=True)
    deviation = values - center
    if two_sided:
        deviation = deviation.abs()
    mask = deviation > n_sigma * spread
    return df.loc[mask, [name_column, column]].reset_index(drop=True)


# this function lines up the two outlier lists by player name
def compare_outliers(tukey, sigma, name_column='Player'):
    tukey_names = set(tukey[name_column])
    sigma_names = set(sigma[name_column])
    return {
        'both': sorted(tukey_names & sigma_names),
        'tukey_only': sorted(tukey_names - sigma_names),
        'sigma_only': sorted(sigma_names - tukey_names),
    }


@dataclass(frozen=True)
class ColumnSummary:
    count: int
    mean: float
    median: float
    modes: List[float]
    mode: float
    std: float
    quartiles: pd.Series
    iqr: float
    lower_fence: float
    upper_fence: float


def describe(values):
    series = _clean(values)
    lower, upper = tukey_fences(series)
    q = quartiles(series)
    return ColumnSummary(
        count=int(series.count()),
        mean=mean(series),
        median=median(series),
        modes=mode_all(series),
        mode=mode_single(series),
        std=std(series),
        quartiles=q,
        iqr=float(q[75] - q[25]),
        lower_fence=lower,
        upper_fence=upper,
    )


# this function builds the text block the report prints for a summary
def format_summary(summary, label):
    modes = ", ".join(f"{value:g}" for value in summary.modes)
    lines = [
        "*****************************",
        f"SUMMARY FOR {label.upper()}",
        f"count: {summary.count}",
        f"mean: {summary.mean:.4f}",
        f"median: {summary.median:.4f}",
        f"mode (all ties): {modes}",
        f"mode (smallest tie): {summary.mode:g}",
        f"std: {summary.std:.4f}",
        "quartiles: " + ", ".join(f"{level}%={value:.4g}" for level, value in summary.quartiles.items()),
        f"IQR: {summary.iqr:.4g}",
        f"Tukey fences: [{summary.lower_fence:.4g}, {summary.upper_fence:.4g}]",
        "*****************************",
    ]
    return "\n".join(lines)
