from typing import Optional

import pandas as pd

TIE = 'tie'
INSUFFICIENT_DATA = 'insufficient data'


def classify(p_candidate1: Optional[float], candidate1: str, candidate2: str) -> str:
    # an undefined probability is its own outcome, never read as 0 or 0.5
    if p_candidate1 is None or pd.isna(p_candidate1):
        return INSUFFICIENT_DATA
    if p_candidate1 > 0.5:
        return candidate1
    if p_candidate1 < 0.5:
        return candidate2
    # only hit when the bias-corrected mean is exactly zero (t = 0)
    return TIE


def call_winners(summary: pd.DataFrame, candidate1: str, candidate2: str) -> pd.DataFrame:
    calls = summary[['region', 'p_candidate1']].copy()
    calls['winner'] = [classify(p, candidate1, candidate2) for p in calls['p_candidate1']]
    return calls.reset_index(drop=True)
