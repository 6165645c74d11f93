from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

# default folders, relative to where the report is run from
DEFAULT_DATA_DIR = 'data'
DEFAULT_OUTPUT_DIR = 'charts'

# columns that hold counts and can never be negative
LEAGUE_COUNT_COLUMNS = ('MP', 'FT', 'FTA', '3P', '3PA')
GAME_COUNT_COLUMNS = ('G', '3P', '3PA')


@dataclass(frozen=True)
class DataFile:
    name: str
    filename: str
    # None means "split on any run of whitespace"
    sep: Optional[str] = '\t'
    count_columns: Tuple[str, ...] = ()


def default_files() -> List[DataFile]:
    """The five input files the report reads, in load order."""
    return [
        DataFile('league_stats', 'league_stats.txt', '\t', LEAGUE_COUNT_COLUMNS),
        DataFile('best_three_pt_season', 'best_three_pt_season.txt', '\t', GAME_COUNT_COLUMNS),
        DataFile('curry', 'curry.csv', ','),
        DataFile('lebron_regular_season', 'lebron_regular_season.txt', '\t'),
        DataFile('lebron_playoffs', 'lebron_playoffs.txt', '\t'),
    ]


@dataclass
class ReportConfig:
    data_dir: Path = Path(DEFAULT_DATA_DIR)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    files: Optional[List[DataFile]] = None
    min_free_throw_attempts: int = 20
    min_free_throw_pct: float = 0.5
    min_minutes: int = 500
    highlight_players: Tuple[str, ...] = ('Stephen Curry', 'Andre Drummond')
    dpi: int = 100

    def __post_init__(self):
        self.data_dir = Path(self.data_dir)
        self.output_dir = Path(self.output_dir)
        if self.files is None:
            self.files = default_files()

    def path_for(self, data_file: DataFile) -> Path:
        return self.data_dir / data_file.filename

    def chart_path(self, name: str) -> Path:
        return self.output_dir / f"{name}.png"
