# import csv to count fields the same way pandas splits them
import csv
import io
from pathlib import Path
# import pandas to work with tabular data
import pandas as pd


class FileAccessError(FileNotFoundError):
    """An input file is missing or cannot be read."""

    def __init__(self, path, reason=""):
        self.path = Path(path)
        message = f"cannot read {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ParseError(ValueError):
    """An input file does not have the shape its header promises."""

    def __init__(self, path, message, line=None):
        self.path = Path(path)
        self.line = line
        where = f"{self.path}, line {line}" if line is not None else str(self.path)
        super().__init__(f"{where}: {message}")


# this function splits one line of text into fields
def _split_fields(line, sep):
    if sep is None:
        return line.split()
    return next(csv.reader([line], delimiter=sep))


# this function makes sure every row has as many fields as the header
def _check_row_widths(path, lines, sep):
    header_width = None
    for line_no, line in enumerate(lines, start=1):
        # skip blank lines, pandas does the same
        if not line.strip():
            continue
        width = len(_split_fields(line, sep))
        if header_width is None:
            header_width = width
        elif width != header_width:
            raise ParseError(path, f"expected {header_width} fields, found {width}", line=line_no)

    if header_width is None:
        raise ParseError(path, "file is empty")


# this function checks that count columns exist and hold no negative values
def _check_counts(path, df, count_columns):
    for column in count_columns:
        if column not in df.columns:
            raise ParseError(path, f"missing column '{column}'")
        values = pd.to_numeric(df[column], errors='coerce')
        # text such as "DNP" in a count column is not a count
        bad = values.isna() & df[column].notna()
        if bad.any():
            row = df.index[bad][0]
            raise ParseError(path, f"non-numeric value '{df.at[row, column]}' in count column '{column}'", line=int(row) + 2)
        if (values < 0).any():
            raise ParseError(path, f"negative value in count column '{column}'")


def load_table(path, sep='\t', count_columns=()):
    """
    Read a delimited text file with a header row into a DataFrame.

    sep is a single delimiter character, or None / "whitespace" to split on
    any run of whitespace. Numeric columns are inferred from their content.
    Raises FileAccessError if the file cannot be read and ParseError if a
    row's width does not match the header.
    """
    path = Path(path)
    if sep == 'whitespace':
        sep = None

    # read the whole file up front, one shot and no retries
    try:
        text = path.read_text()
    except OSError as exc:
        raise FileAccessError(path, exc.strerror or str(exc)) from exc

    lines = text.splitlines()
    _check_row_widths(path, lines, sep)

    try:
        df = pd.read_csv(io.StringIO(text), sep=r'\s+' if sep is None else sep)
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise ParseError(path, str(exc)) from exc

    # header cells sometimes carry stray spaces
    df.columns = [str(column).strip() for column in df.columns]

    _check_counts(path, df, count_columns)
    return df


# this function loads every file the report needs before any analysis runs
def load_all(config):
    tables = {}
    for data_file in config.files:
        path = config.path_for(data_file)
        print(f"loading {data_file.name} from {path}...")
        tables[data_file.name] = load_table(path, sep=data_file.sep, count_columns=data_file.count_columns)
        print(f"  {len(tables[data_file.name])} rows, columns: {tables[data_file.name].columns.tolist()}")
    return tables
