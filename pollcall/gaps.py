from typing import Sequence

import pandas as pd

from pollcall.config import DEFAULT_GROUP_KEYS


def compute_gaps(
    polls: pd.DataFrame,
    candidate1: str,
    candidate2: str,
    group_keys: Sequence[str] = DEFAULT_GROUP_KEYS,
) -> pd.DataFrame:
    """
    reduces poll observations to one signed margin per poll question

    pct_diff = candidate1's pct - candidate2's pct, so candidate1 leading is positive
    questions missing either candidate produce no row at all
    output is ordered by start_date (stable, so ties keep input order)
    """
    if candidate1 == candidate2:
        raise ValueError(f'cannot compute a gap between {candidate1!r} and itself')

    missing = [key for key in DEFAULT_GROUP_KEYS if key not in group_keys]
    if missing:
        raise ValueError(f"group keys must include {', '.join(missing)}")

    keys = ['question_id'] + [key for key in group_keys if key != 'question_id']

    # split into one frame per candidate, then join them side by side on the question keys
    def candidate_rows(name, pct_col):
        rows = polls[polls['candidate_name'] == name]
        # a candidate appears at most once per question, keep the first if the feed repeats one
        rows = rows.drop_duplicates(subset=keys, keep='first')
        return rows[keys + ['pct']].rename(columns={'pct': pct_col})

    # inner join drops questions missing either candidate and keeps the left row order
    gaps = candidate_rows(candidate1, 'pct_candidate1').merge(
        candidate_rows(candidate2, 'pct_candidate2'),
        on=keys,
        how='inner',
    )

    gaps['pct_diff'] = gaps['pct_candidate1'] - gaps['pct_candidate2']
    gaps = gaps.drop(columns=['pct_candidate1', 'pct_candidate2'])

    gaps = gaps.sort_values('start_date', kind='stable')

    return gaps.reset_index(drop=True)
