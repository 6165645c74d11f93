"""Shared pytest fixtures for the shooting report tests."""

import pytest
import pandas as pd

from config import ReportConfig


@pytest.fixture
def league_df():
    """Season-to-date totals; 3PA for the regulars is [5, 13, 13, 70, 165, 572]."""
    return pd.DataFrame([
        {'Player': 'Andre Drummond', 'MP': 2600, 'FT': 20, 'FTA': 47, '3P': 1, '3PA': 5},
        {'Player': 'Tim Duncan', 'MP': 1500, 'FT': 10, 'FTA': 12, '3P': 0, '3PA': 13},
        {'Player': 'DeAndre Jordan', 'MP': 2500, 'FT': 30, 'FTA': 70, '3P': 2, '3PA': 13},
        {'Player': 'Chris Paul', 'MP': 2400, 'FT': 200, 'FTA': 220, '3P': 25, '3PA': 70},
        {'Player': 'Kevin Durant', 'MP': 2500, 'FT': 250, 'FTA': 280, '3P': 60, '3PA': 165},
        {'Player': 'Stephen Curry', 'MP': 2700, 'FT': 363, 'FTA': 400, '3P': 240, '3PA': 572},
        {'Player': 'Bench Guy', 'MP': 10, 'FT': 0, 'FTA': 0, '3P': 0, '3PA': 0},
    ])


@pytest.fixture
def games_df():
    """Game log for one season; the source 3P% column is deliberately wrong."""
    return pd.DataFrame({
        'Player': ['Stephen Curry'] * 6,
        'Season': ['2015-16'] * 6,
        'G': [1, 2, 3, 4, 5, 6],
        'Date': ['2015-10-27', '2015-10-31', '2015-11-02', '2015-11-04', '2015-11-06', '2015-11-07'],
        'Tm': ['GSW'] * 6,
        'Opp': ['NOP', 'NOP', 'MEM', 'LAC', 'SAC', 'DET'],
        '3P': [5, 3, 3, 4, 4, 0],
        '3PA': [10, 8, 6, 9, 11, 0],
        '3P%': [0.999] * 6,
    })


@pytest.fixture
def shots_df():
    return pd.DataFrame({
        'x': [-20.0, -5.5, 0.0, 3.2, 12.0, 22.5, 8.0, -14.0],
        'y': [5.0, 18.0, 2.0, 24.0, 19.5, 1.0, 26.0, 17.0],
        'shot_type': ['pullup', 'catch_and_shoot', 'layup', 'pullup', 'pullup', 'catch_and_shoot', 'pullup', 'pullup'],
        'made': [1, 0, 1, 0, 1, 1, 0, 1],
    })


@pytest.fixture
def regular_df():
    return pd.DataFrame({'x': [0.0, 10.0, -12.5, 20.0], 'y': [1.0, 15.0, 20.0, 8.0]})


@pytest.fixture
def playoffs_df():
    return pd.DataFrame({'x': [1.5, -3.0, 22.0], 'y': [0.5, 12.0, 3.0]})


@pytest.fixture
def data_dir(tmp_path, league_df, games_df, shots_df, regular_df, playoffs_df):
    """
    Write every input file the report reads into a temp folder.

    Uses tmp_path fixture to ensure isolation between tests.
    """
    folder = tmp_path / 'data'
    folder.mkdir()
    league_df.to_csv(folder / 'league_stats.txt', sep='\t', index=False)
    games_df.to_csv(folder / 'best_three_pt_season.txt', sep='\t', index=False)
    shots_df.to_csv(folder / 'curry.csv', index=False)
    regular_df.to_csv(folder / 'lebron_regular_season.txt', sep='\t', index=False)
    playoffs_df.to_csv(folder / 'lebron_playoffs.txt', sep='\t', index=False)
    return folder


@pytest.fixture
def report_config(tmp_path, data_dir):
    return ReportConfig(data_dir=data_dir, output_dir=tmp_path / 'charts', dpi=40)
