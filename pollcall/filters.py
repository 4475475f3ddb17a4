import pandas as pd

from pollcall.config import PollFilter


def _known_true(condition: pd.Series) -> pd.Series:
    # comparisons against missing values (NA grades, NA sample sizes) count as failing
    return condition.fillna(False).astype(bool)


def apply_filters(polls: pd.DataFrame, poll_filter: PollFilter) -> pd.DataFrame:
    # every active option narrows the same mask, so they combine with AND
    keep = pd.Series(True, index=polls.index)

    if poll_filter.cycle is not None:
        keep &= _known_true(polls['cycle'] == poll_filter.cycle)

    if poll_filter.regions is not None:
        keep &= _known_true(polls['region'].isin(poll_filter.regions))

    if poll_filter.grade_pattern is not None:
        # prefix match, so '^[ABC]' takes A+, B/C, C- and so on
        grades = polls['pollster_grade'].astype('string')
        keep &= _known_true(grades.str.match(poll_filter.grade_pattern))

    if poll_filter.min_sample_size is not None:
        keep &= _known_true(polls['sample_size'] >= poll_filter.min_sample_size)

    if poll_filter.min_start_date is not None:
        keep &= _known_true(polls['start_date'] >= pd.Timestamp(poll_filter.min_start_date))

    if poll_filter.population is not None:
        keep &= _known_true(polls['population_type'] == poll_filter.population)

    return polls[keep].reset_index(drop=True)
