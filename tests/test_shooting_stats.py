"""Tests for derived columns and filters (shooting_stats.py)."""

import numpy as np
import pandas as pd
import pytest

from shooting_stats import (
    add_ratio,
    derive,
    describe_steps,
    filter_rows,
    make_rate,
    recompute_pct,
    run_steps,
    season_totals,
    split_makes,
    where,
)


#
# add_ratio
#

class TestAddRatio:
    def test_free_throw_percentage(self, league_df):
        result = add_ratio(league_df, 'FT%', 'FT', 'FTA')
        drummond = result[result['Player'] == 'Andre Drummond'].iloc[0]
        assert drummond['FT%'] == pytest.approx(0.4255, abs=1e-4)

    def test_zero_attempts_is_nan_not_zero(self, league_df):
        result = add_ratio(league_df, 'FT%', 'FT', 'FTA')
        bench = result[result['Player'] == 'Bench Guy'].iloc[0]
        assert np.isnan(bench['FT%'])

    def test_percentages_in_unit_interval(self, league_df):
        result = add_ratio(league_df, 'FT%', 'FT', 'FTA')
        attempted = result[result['FTA'] > 0]['FT%']
        assert ((attempted >= 0) & (attempted <= 1)).all()

    def test_input_is_not_mutated(self, league_df):
        before = league_df.copy()
        add_ratio(league_df, 'FT%', 'FT', 'FTA')
        pd.testing.assert_frame_equal(league_df, before)
        assert 'FT%' not in league_df.columns

    def test_column_is_appended_last(self, league_df):
        result = add_ratio(league_df, '3P%', '3P', '3PA')
        assert result.columns[-1] == '3P%'


#
# filter_rows
#

class TestFilterRows:
    def test_subset_in_original_order(self, league_df):
        result = filter_rows(league_df, '3PA', '>', 12)
        assert result['Player'].tolist() == [
            'Tim Duncan', 'DeAndre Jordan', 'Chris Paul', 'Kevin Durant', 'Stephen Curry',
        ]
        assert set(result.index) <= set(league_df.index)
        assert list(result.index) == sorted(result.index)

    @pytest.mark.parametrize('op,expected', [
        ('>', 2), ('>=', 4), ('<', 3), ('<=', 5), ('==', 2), ('!=', 5),
    ])
    def test_every_operator(self, league_df, op, expected):
        assert len(filter_rows(league_df, 'MP', op, 2500)) == expected

    def test_text_equality(self, shots_df):
        result = filter_rows(shots_df, 'shot_type', '==', 'pullup')
        assert len(result) == 5

    def test_missing_values_never_match(self, league_df):
        with_pct = add_ratio(league_df, 'FT%', 'FT', 'FTA')
        result = filter_rows(with_pct, 'FT%', '!=', 0.5)
        assert 'Bench Guy' not in result['Player'].tolist()

    def test_returns_a_copy(self, league_df):
        result = filter_rows(league_df, 'MP', '>', 0)
        result.loc[:, 'MP'] = 0
        assert league_df['MP'].iloc[0] == 2600

    def test_unknown_operator(self, league_df):
        with pytest.raises(ValueError):
            filter_rows(league_df, 'MP', '=>', 10)

    def test_unknown_column(self, league_df):
        with pytest.raises(KeyError):
            filter_rows(league_df, 'PTS', '>', 10)


#
# step order
#

class TestRunSteps:
    def test_order_changes_the_eligible_set(self, league_df):
        attempts_first = run_steps(league_df, [where('FTA', '>=', 20), derive('FT%', 'FT', 'FTA')])
        pct_first = run_steps(league_df, [derive('FT%', 'FT', 'FTA'), where('FT%', '>=', 0.5)])

        assert set(attempts_first['Player']) == {
            'Andre Drummond', 'DeAndre Jordan', 'Chris Paul', 'Kevin Durant', 'Stephen Curry',
        }
        assert set(pct_first['Player']) == {'Tim Duncan', 'Chris Paul', 'Kevin Durant', 'Stephen Curry'}
        assert set(attempts_first['Player']) != set(pct_first['Player'])

    def test_steps_run_in_given_order(self, league_df):
        # filtering on a column before it exists must fail
        with pytest.raises(KeyError):
            run_steps(league_df, [where('FT%', '>=', 0.5), derive('FT%', 'FT', 'FTA')])

    def test_no_steps_returns_input(self, league_df):
        assert run_steps(league_df, []) is league_df

    def test_describe_steps(self):
        steps = [where('FTA', '>=', 20), derive('FT%', 'FT', 'FTA')]
        assert describe_steps(steps) == "filter FTA >= 20 -> derive FT% = FT / FTA"


#
# season_totals / recompute_pct
#

class TestSeasonTotals:
    def test_totals_and_recomputed_pct(self, games_df):
        totals = season_totals(games_df)
        row = totals.iloc[0]
        assert row['3P'] == 19
        assert row['3PA'] == 44
        assert row['games'] == 6
        assert row['3P%'] == pytest.approx(19 / 44)

    def test_one_row_per_player(self, games_df):
        other = games_df.assign(Player='Klay Thompson', **{'3P': 1, '3PA': 4})
        totals = season_totals(pd.concat([games_df, other], ignore_index=True))
        assert totals['Player'].tolist() == ['Stephen Curry', 'Klay Thompson']
        assert totals.iloc[1]['3P%'] == pytest.approx(0.25)

    def test_one_row_per_season(self, games_df):
        two_seasons = pd.concat([games_df, games_df.assign(Season='2016-17')], ignore_index=True)
        totals = season_totals(two_seasons)
        assert totals['Season'].tolist() == ['2015-16', '2016-17']
        assert totals['3P'].tolist() == [19, 19]
        assert totals['3PA'].tolist() == [44, 44]
        assert totals['games'].tolist() == [6, 6]

    def test_group_by_player_only(self, games_df):
        two_seasons = pd.concat([games_df, games_df.assign(Season='2016-17')], ignore_index=True)
        totals = season_totals(two_seasons, by='Player')
        assert len(totals) == 1
        assert totals.iloc[0]['3PA'] == 88


class TestRecomputePct:
    def test_source_percentage_is_replaced(self, games_df):
        result = recompute_pct(games_df, '3P%', '3P', '3PA')
        assert result['3P%'].iloc[0] == pytest.approx(0.5)
        assert np.isnan(result['3P%'].iloc[5])
        assert games_df['3P%'].iloc[0] == pytest.approx(0.999)

    def test_kept_when_counts_missing(self):
        df = pd.DataFrame({'3P%': [0.4]})
        assert recompute_pct(df, '3P%', '3P', '3PA')['3P%'].iloc[0] == pytest.approx(0.4)


#
# makes and misses
#

class TestMakes:
    def test_split_makes(self, shots_df):
        makes, misses = split_makes(shots_df)
        assert len(makes) == 5
        assert len(misses) == 3
        assert (makes['made'] == 1).all()

    def test_make_rate(self, shots_df):
        assert make_rate(shots_df) == pytest.approx(5 / 8)

    def test_make_rate_empty(self, shots_df):
        assert np.isnan(make_rate(shots_df.iloc[0:0]))

    def test_text_outcomes(self):
        shots = pd.DataFrame({'made': ['made', 'Missed', 'MADE', 'missed']})
        makes, misses = split_makes(shots)
        assert makes.index.tolist() == [0, 2]
        assert misses.index.tolist() == [1, 3]
        assert make_rate(shots) == pytest.approx(0.5)

    def test_missing_outcome_is_a_miss(self):
        shots = pd.DataFrame({'made': [1, None, 0, 1]})
        assert make_rate(shots) == pytest.approx(0.5)

    def test_unknown_text_outcome(self):
        with pytest.raises(ValueError, match="blocked"):
            split_makes(pd.DataFrame({'made': ['made', 'blocked']}))

    def test_outcome_not_zero_or_one(self, shots_df):
        with pytest.raises(ValueError, match="0 or 1"):
            make_rate(shots_df.assign(made=[1, 0, 2, 0, 1, 1, 0, 1]))
