import sys
import os
import datetime

import pandas as pd
import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from pollcall.config import PollFilter
from pollcall.feed import load_polls
from pollcall.filters import apply_filters
from polldata import SAMPLE_FEED, poll_rows

NO_FILTER = PollFilter(grade_pattern=None)


@pytest.fixture(scope='module')
def polls():
    return load_polls(SAMPLE_FEED)


def questions(filtered):
    return set(filtered['question_id'])


def test_inactive_filter_keeps_everything(polls):
    assert len(apply_filters(polls, NO_FILTER)) == len(polls)


def test_cycle(polls):
    filtered = apply_filters(polls, PollFilter(grade_pattern=None, cycle=2020))
    assert 114 not in questions(filtered)
    assert (filtered['cycle'] == 2020).all()


def test_regions(polls):
    filtered = apply_filters(polls, PollFilter(grade_pattern=None, regions=frozenset({'Ohio', 'Texas'})))
    assert set(filtered['region']) == {'Ohio', 'Texas'}


def test_default_grade_pattern(polls):
    filtered = apply_filters(polls, PollFilter())
    assert 110 not in questions(filtered)
    # A+, A-, B/C all pass on their leading letter
    assert {101, 103, 104}.issubset(questions(filtered))


def test_ungraded_pollster_excluded():
    polls = poll_rows([
        (1, 'X', '2020-09-01', None, 'A', 50),
        (2, 'X', '2020-09-02', 'B+', 'A', 50),
    ])
    assert questions(apply_filters(polls, PollFilter())) == {2}


@pytest.mark.parametrize(('pattern', 'expected'), [
    ('^A', {1}),
    ('^[AB]', {1, 2}),
    ('C', {3}),
])
def test_grade_pattern_prefix(pattern, expected):
    polls = poll_rows([
        (1, 'X', '2020-09-01', 'A/B', 'A', 50),
        (2, 'X', '2020-09-01', 'B', 'A', 50),
        (3, 'X', '2020-09-01', 'C-', 'A', 50),
    ])
    assert questions(apply_filters(polls, PollFilter(grade_pattern=pattern))) == expected


def test_min_sample_size_inclusive(polls):
    filtered = apply_filters(polls, PollFilter(grade_pattern=None, min_sample_size=600))
    assert 102 in questions(filtered)
    assert 106 not in questions(filtered)
    # no sample size reported
    assert 111 not in questions(filtered)


def test_min_start_date(polls):
    filtered = apply_filters(polls, PollFilter(grade_pattern=None, min_start_date=datetime.date(2020, 9, 10)))
    assert 102 in questions(filtered)
    assert 101 not in questions(filtered)
    assert (filtered['start_date'] >= pd.Timestamp('2020-09-10')).all()


def test_population(polls):
    filtered = apply_filters(polls, PollFilter(grade_pattern=None, population='rv'))
    assert questions(filtered) == {108}


def test_filters_combine(polls):
    filtered = apply_filters(polls, PollFilter(cycle=2020, min_sample_size=500, population='lv'))
    assert questions(filtered) == {101, 102, 103, 104, 105, 106, 107, 109, 113}
