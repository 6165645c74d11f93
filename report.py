# import pandas to work with tabular data
import pandas as pd

import charts
import summary_stats
from charts import ReferenceMarker
from config import ReportConfig
from data_loader import FileAccessError, ParseError, load_all
from shooting_stats import (
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

# colors used for highlighted players, in order
HIGHLIGHT_COLORS = ('red', 'darkorange', 'purple', 'green')


class ReportError(RuntimeError):
    """A stage of the report failed; carries the stage name and the file involved."""

    def __init__(self, stage, source, cause):
        self.stage = stage
        self.source = source
        self.cause = cause
        super().__init__(f"{stage} failed for {source}: {cause}")


# this function builds a vertical marker for each highlighted player found in the table
def player_markers(df, column, players, name_column='Player'):
    markers = []
    for player, color in zip(players, HIGHLIGHT_COLORS):
        rows = df[df[name_column] == player]
        if rows.empty or pd.isna(rows.iloc[0][column]):
            print(f"  {player} not in the eligible set, no marker drawn")
            continue
        value = float(rows.iloc[0][column])
        markers.append(ReferenceMarker(f"{player} ({value:.3f})", value, color))
    return markers


def free_throw_analysis(league, config):
    """
    Free throw percentage across the league.

    The same two operations are run in both orders: filtering on attempts and
    then deriving the percentage keeps everyone with enough attempts, while
    deriving first and filtering on the percentage keeps good shooters
    regardless of volume.
    """
    print("\n***** FREE THROWS *****")
    attempts_first = [
        where('FTA', '>=', config.min_free_throw_attempts),
        derive('FT%', 'FT', 'FTA'),
    ]
    pct_first = [
        derive('FT%', 'FT', 'FTA'),
        where('FT%', '>=', config.min_free_throw_pct),
    ]
    eligible = run_steps(league, attempts_first)
    shooters = run_steps(league, pct_first)

    print(f"{describe_steps(attempts_first)}: {len(eligible)} players")
    print(f"{describe_steps(pct_first)}: {len(shooters)} players")
    only_volume = sorted(set(eligible['Player']) - set(shooters['Player']))
    only_pct = sorted(set(shooters['Player']) - set(eligible['Player']))
    print(f"only in the attempts-first set: {', '.join(only_volume) or 'none'}")
    print(f"only in the percentage-first set: {', '.join(only_pct) or 'none'}")

    print(summary_stats.format_summary(summary_stats.describe(eligible['FT%']), 'FT%'))

    markers = player_markers(eligible, 'FT%', config.highlight_players)
    return charts.histogram(
        eligible, 'FT%', bin_width=0.05, markers=markers,
        title=f"free throw % (at least {config.min_free_throw_attempts} attempts)",
        xlabel="free throw percentage", ylabel="number of players",
        output=config.chart_path('free_throw_pct'), dpi=config.dpi,
    )


def three_point_volume_analysis(league, config):
    print("\n***** THREE POINT ATTEMPTS *****")
    regulars = filter_rows(league, 'MP', '>=', config.min_minutes)
    summary = summary_stats.describe(regulars['3PA'])
    print(f"players with at least {config.min_minutes} minutes: {len(regulars)}")
    print(summary_stats.format_summary(summary, '3PA'))

    # both rules run on the same rows and are reported side by side
    tukey = summary_stats.tukey_outliers(regulars, '3PA')
    sigma = summary_stats.sigma_outliers(regulars, '3PA')
    print("Tukey fence outliers:")
    print(tukey.to_string(index=False) if not tukey.empty else "  none")
    print("three sigma outliers:")
    print(sigma.to_string(index=False) if not sigma.empty else "  none")
    overlap = summary_stats.compare_outliers(tukey, sigma)
    print(f"flagged by both: {', '.join(overlap['both']) or 'none'}")
    print(f"Tukey only: {', '.join(overlap['tukey_only']) or 'none'}")
    print(f"three sigma only: {', '.join(overlap['sigma_only']) or 'none'}")

    q = summary.quartiles
    markers = [
        ReferenceMarker(f"Q1 ({q[25]:g})", q[25], 'gray'),
        ReferenceMarker(f"median ({q[50]:g})", q[50], 'black'),
        ReferenceMarker(f"Q3 ({q[75]:g})", q[75], 'gray'),
    ]
    markers += player_markers(regulars, '3PA', config.highlight_players)
    return charts.density(
        regulars, '3PA', markers=markers,
        title="three point attempts per player",
        xlabel="three point attempts",
        output=config.chart_path('three_point_attempts'), dpi=config.dpi,
    )


def best_season_analysis(games, config):
    print("\n***** BEST THREE POINT SEASON *****")
    # never trust the source percentage when made and attempted are there
    games = recompute_pct(games, '3P%', '3P', '3PA')

    totals = season_totals(games)
    print("season totals:")
    print(totals.to_string(index=False))

    made = games['3P']
    print(f"threes made per game: mean {summary_stats.mean(made):.2f}, median {summary_stats.median(made):g}")
    print(f"most common games (all ties): {summary_stats.mode_all(made)}")
    print(f"most common game (smallest tie): {summary_stats.mode_single(made):g}")

    # one line per player season, at the percentage from its totals row
    markers = [
        ReferenceMarker(f"{row['Player']} {row['Season']} 3P% ({row['3P%']:.3f})", row['3P%'], color, axis='y')
        for (_, row), color in zip(totals.dropna(subset=['3P%']).iterrows(), HIGHLIGHT_COLORS)
    ]
    return charts.scatter(
        games, 'G', '3P%', size='3PA', size_scale=8, alpha=0.7, markers=markers,
        title="three point % by game (size = attempts)",
        xlabel="game number", ylabel="three point percentage",
        output=config.chart_path('best_three_point_season'), dpi=config.dpi,
    )


def pullup_analysis(shots, config):
    print("\n***** PULLUP JUMP SHOTS *****")
    pullups = filter_rows(shots, 'shot_type', '==', 'pullup')
    makes, misses = split_makes(pullups)
    print(f"pullup attempts: {len(pullups)} of {len(shots)} shots")
    print(f"made: {len(makes)}, missed: {len(misses)}, make rate: {make_rate(pullups):.3f}")
    return charts.court_overlay(
        makes, misses, labels=('made', 'missed'), colors=('green', 'red'),
        title="pullup jump shots",
        output=config.chart_path('pullup_shots'), dpi=config.dpi,
    )


def regular_vs_playoffs_analysis(regular, playoffs, config):
    print("\n***** REGULAR SEASON VS PLAYOFFS *****")
    print(f"regular season shots: {len(regular)}, playoff shots: {len(playoffs)}")
    return charts.court_overlay(
        regular, playoffs, labels=('regular season', 'playoffs'), colors=('tab:blue', 'tab:orange'),
        alpha=0.4, title="shot locations: regular season vs playoffs",
        output=config.chart_path('regular_vs_playoffs'), dpi=config.dpi,
    )


# each analysis with the tables it reads, in report order
ANALYSES = [
    ('free_throws', free_throw_analysis, ('league_stats',)),
    ('three_point_volume', three_point_volume_analysis, ('league_stats',)),
    ('best_season', best_season_analysis, ('best_three_pt_season',)),
    ('pullups', pullup_analysis, ('curry',)),
    ('regular_vs_playoffs', regular_vs_playoffs_analysis, ('lebron_regular_season', 'lebron_playoffs')),
]


def run_report(config=None):
    """Load every input, then run each analysis; returns {analysis name: chart path}."""
    config = config or ReportConfig()

    try:
        tables = load_all(config)
    except (FileAccessError, ParseError) as exc:
        raise ReportError('load', exc.path, exc) from exc

    outputs = {}
    for name, analysis, sources in ANALYSES:
        try:
            outputs[name] = analysis(*(tables[source] for source in sources), config)
        except (KeyError, ValueError, TypeError) as exc:
            raise ReportError(name, ", ".join(sources), exc) from exc
        print(f"saved {outputs[name]}")
    return outputs
