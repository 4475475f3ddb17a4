import pandas as pd

SUMMARY_COLUMNS = ['region', 'n_polls', 'first_poll_date', 'last_poll_date', 'mean_gap', 'stdev_gap']


def summarize(gaps: pd.DataFrame) -> pd.DataFrame:
    """
    descriptive statistics of pct_diff per region

    stdev_gap is the sample standard deviation (n - 1) and is NA for a region with one poll
    regions with no gap rows never show up, since groupby only sees regions that are present
    """
    summary = (
        gaps.groupby('region', sort=True, observed=True)
        .agg(
            n_polls=('pct_diff', 'size'),
            first_poll_date=('start_date', 'min'),
            last_poll_date=('start_date', 'max'),
            mean_gap=('pct_diff', 'mean'),
            stdev_gap=('pct_diff', 'std'),
        )
        .reset_index()
    )

    # NaN from a one-row std becomes an explicit NA
    summary['stdev_gap'] = summary['stdev_gap'].astype('Float64')
    summary['n_polls'] = summary['n_polls'].astype(int)

    return summary[SUMMARY_COLUMNS]
