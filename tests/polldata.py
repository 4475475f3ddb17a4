import os

import pandas as pd

SAMPLE_FEED = os.path.join(os.path.dirname(__file__), 'data', 'polls_sample.csv')


def poll_rows(rows):
    """builds prepared poll observations from (question_id, region, start_date, grade, candidate, pct) tuples"""
    df = pd.DataFrame(rows, columns=['question_id', 'region', 'start_date', 'pollster_grade', 'candidate_name', 'pct'])
    df['start_date'] = pd.to_datetime(df['start_date'])
    df['end_date'] = df['start_date'] + pd.Timedelta(days=2)
    df['cycle'] = pd.array([2020] * len(df), dtype='Int64')
    df['sample_size'] = pd.array([800] * len(df), dtype='Int64')
    df['population_type'] = 'lv'
    df['pct'] = df['pct'].astype(float)
    return df


def gap_rows(region_gaps):
    """builds a gap table from {region: [pct_diff, ...]}"""
    rows = []
    question_id = 0
    for region, diffs in region_gaps.items():
        for day, diff in enumerate(diffs):
            question_id += 1
            rows.append({
                'question_id': question_id,
                'region': region,
                'start_date': pd.Timestamp('2020-09-01') + pd.Timedelta(days=day),
                'pollster_grade': 'A',
                'pct_diff': float(diff),
            })
    df = pd.DataFrame(rows, columns=['question_id', 'region', 'start_date', 'pollster_grade', 'pct_diff'])
    return df.astype({'start_date': 'datetime64[ns]', 'pct_diff': float})
