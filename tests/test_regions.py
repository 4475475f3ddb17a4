import sys
import os

import pandas as pd
import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from pollcall.gaps import compute_gaps
from pollcall.regions import summarize
from polldata import gap_rows, poll_rows


def by_region(summary):
    return summary.set_index('region')


def test_counts_match_gap_rows():
    gaps = gap_rows({'X': [5, 3, 7, 1], 'Y': [-2, 0], 'Z': [1]})
    summary = by_region(summarize(gaps))
    for region, count in gaps['region'].value_counts().items():
        assert summary.loc[region, 'n_polls'] == count


def test_date_span():
    summary = by_region(summarize(gap_rows({'X': [5, 3, 7, 1], 'Z': [1]})))
    assert summary.loc['X', 'first_poll_date'] == pd.Timestamp('2020-09-01')
    assert summary.loc['X', 'last_poll_date'] == pd.Timestamp('2020-09-04')
    assert (summary['first_poll_date'] <= summary['last_poll_date']).all()


def test_mean_and_sample_stdev():
    summary = by_region(summarize(gap_rows({'X': [5, 3, 7, 1]})))
    assert summary.loc['X', 'mean_gap'] == 4.0
    # n - 1 denominator: sum of squares 20 over 3
    assert summary.loc['X', 'stdev_gap'] == pytest.approx((20 / 3) ** 0.5)


def test_single_poll_stdev_undefined():
    summary = by_region(summarize(gap_rows({'Z': [1]})))
    assert summary.loc['Z', 'n_polls'] == 1
    assert summary.loc['Z', 'stdev_gap'] is pd.NA


def test_region_without_gaps_omitted():
    polls = poll_rows([
        (1, 'Arizona', '2020-09-10', 'A', 'Biden', 49),
        (1, 'Arizona', '2020-09-10', 'A', 'Trump', 45),
        (2, 'Georgia', '2020-09-05', 'C', 'Biden', 47),
    ])
    summary = summarize(compute_gaps(polls, 'Biden', 'Trump'))
    assert list(summary['region']) == ['Arizona']


def test_empty_gaps():
    summary = summarize(gap_rows({}))
    assert summary.empty
    assert 'mean_gap' in summary.columns
