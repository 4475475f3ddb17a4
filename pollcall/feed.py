import pandas as pd

from pollcall.config import DEFAULT_FEED_URL, FEED_COLUMNS, NATIONAL_REGION


class FeedError(ValueError):
    """The poll feed cannot be turned into poll observations."""


def _parse_dates(values: pd.Series) -> pd.Series:
    # feed dates are month/day/year, with two-digit years in the 538 file
    if pd.api.types.is_datetime64_any_dtype(values):
        return values
    values = values.astype('string').str.strip()
    parsed = pd.to_datetime(values, format='%m/%d/%y', errors='coerce')
    four_digit = pd.to_datetime(values, format='%m/%d/%Y', errors='coerce')
    return parsed.fillna(four_digit)


def prepare_polls(raw: pd.DataFrame) -> pd.DataFrame:
    """
    turns raw feed rows into poll observations (one row per question x candidate)

    renames the feed columns to the names used downstream, parses dates and
    numbers, and drops rows whose dates or pct cannot be read
    a sample size that cannot be read becomes missing rather than dropping the row
    raises FeedError if a required column is absent
    """
    missing = [col for col in FEED_COLUMNS if col not in raw.columns]
    if missing:
        raise FeedError(f"poll feed is missing required column(s): {', '.join(missing)}")

    df = raw[list(FEED_COLUMNS)].rename(columns=FEED_COLUMNS).copy()

    # national polls have no state
    df['region'] = df['region'].fillna(NATIONAL_REGION)

    df['start_date'] = _parse_dates(df['start_date'])
    df['end_date'] = _parse_dates(df['end_date'])
    df['pct'] = pd.to_numeric(df['pct'], errors='coerce')
    df['sample_size'] = pd.to_numeric(df['sample_size'], errors='coerce').round().astype('Int64')
    df['cycle'] = pd.to_numeric(df['cycle'], errors='coerce').astype('Int64')

    # malformed rows never reach the gap calculator
    n_before = len(df)
    df = df.dropna(subset=['start_date', 'end_date', 'pct']).reset_index(drop=True)
    n_dropped = n_before - len(df)
    if n_dropped:
        print(f"Rows dropped for unreadable dates or pct: {n_dropped}")

    return df


def load_polls(source: str = DEFAULT_FEED_URL) -> pd.DataFrame:
    # source can be a local path or a url, read once per run
    raw = pd.read_csv(source)
    print(f"Loaded {len(raw)} poll rows from {source}")
    return prepare_polls(raw)
