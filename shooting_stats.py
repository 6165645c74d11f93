# import operator for the comparison table used by filters
import operator
# import numpy for NaN
import numpy as np
# import pandas to work with tabular data
import pandas as pd

# comparison operators a filter can use
COMPARISONS = {
    '>': operator.gt,
    '>=': operator.ge,
    '<': operator.lt,
    '<=': operator.le,
    '==': operator.eq,
    '!=': operator.ne,
}


# this function appends numerator / denominator as a new column on a copy of df
def add_ratio(df, name, numerator, denominator):
    """
    Return a copy of df with `name` = numerator / denominator.

    Rows where the denominator is zero (or missing) get NaN, so a player with
    no attempts has an undefined percentage rather than 0.
    """
    made = pd.to_numeric(df[numerator], errors='coerce').astype(float)
    attempted = pd.to_numeric(df[denominator], errors='coerce').astype(float)
    ratio = made / attempted.where(attempted != 0)
    return df.assign(**{name: ratio})


# this function keeps the rows where `column op threshold` holds, in their original order
def filter_rows(df, column, op, threshold):
    if op not in COMPARISONS:
        raise ValueError(f"unknown comparison '{op}', expected one of {sorted(COMPARISONS)}")
    if column not in df.columns:
        raise KeyError(column)

    values = df[column]
    # missing values never satisfy a predicate, not even '!='
    mask = COMPARISONS[op](values, threshold) & values.notna()
    return df[mask].copy()


def derive(name, numerator, denominator):
    """Build a step that appends a ratio column."""
    def step(df):
        return add_ratio(df, name, numerator, denominator)
    step.description = f"derive {name} = {numerator} / {denominator}"
    return step


def where(column, op, threshold):
    """Build a step that filters rows."""
    def step(df):
        return filter_rows(df, column, op, threshold)
    step.description = f"filter {column} {op} {threshold}"
    return step


# this function runs derive/filter steps in exactly the order given
def run_steps(df, steps):
    result = df
    for step in steps:
        result = step(result)
    return result


def describe_steps(steps):
    return " -> ".join(getattr(step, 'description', step.__name__) for step in steps)


# this function adds up made and attempted shots for each player season and recomputes the percentage
def season_totals(games, made='3P', attempted='3PA', by=('Player', 'Season'), pct_name='3P%'):
    keys = [by] if isinstance(by, str) else list(by)
    totals = (
        games.groupby(keys, sort=False)
        .agg(**{made: (made, 'sum'), attempted: (attempted, 'sum'), 'games': (made, 'size')})
        .reset_index()
    )
    return add_ratio(totals, pct_name, made, attempted)


# this function drops a stale source percentage column and recomputes it from made/attempted
def recompute_pct(df, name, made, attempted):
    if made in df.columns and attempted in df.columns:
        return add_ratio(df.drop(columns=[name], errors='ignore'), name, made, attempted)
    return df.copy()


MADE_WORDS = {'made', 'make', '1', 'true'}
MISSED_WORDS = {'missed', 'miss', '0', 'false'}


# this function turns a shot outcome column into True (made) / False (missed)
def _outcomes(shots, outcome):
    column = shots[outcome]
    if pd.api.types.is_bool_dtype(column):
        return column.astype(bool)
    if pd.api.types.is_numeric_dtype(column):
        bad = column.notna() & ~column.isin([0, 1])
        if bad.any():
            raise ValueError(f"'{outcome}' must be 0 or 1, found {column[bad].iloc[0]}")
        # a missing outcome counts as a miss
        return column.fillna(0) == 1

    words = column.astype(str).str.strip().str.lower()
    known = column.isna() | words.isin(MADE_WORDS | MISSED_WORDS)
    if not known.all():
        raise ValueError(f"unknown shot outcome '{column[~known].iloc[0]}' in '{outcome}'")
    return column.notna() & words.isin(MADE_WORDS)


# this function splits shots into made and missed
def split_makes(shots, outcome='made'):
    made_mask = _outcomes(shots, outcome)
    return shots[made_mask].copy(), shots[~made_mask].copy()


def make_rate(shots, outcome='made'):
    if shots.empty:
        return np.nan
    return float(_outcomes(shots, outcome).mean())
