from typing import NamedTuple, Optional

import pandas as pd

from pollcall.config import RunConfig
from pollcall.feed import load_polls
from pollcall.filters import apply_filters
from pollcall.gaps import compute_gaps
from pollcall.inference import infer
from pollcall.winner import call_winners


class PipelineResult(NamedTuple):
    polls: pd.DataFrame
    gaps: pd.DataFrame
    summary: pd.DataFrame
    calls: pd.DataFrame


def print_summary_table(summary: pd.DataFrame, calls: pd.DataFrame, config: RunConfig):
    """prints one line per region with the gap statistics, win probability and call"""
    def fmt(val, decimals=2):
        return f"{val:.{decimals}f}" if pd.notna(val) else '--'

    def fmt_date(val):
        return val.strftime('%Y-%m-%d') if pd.notna(val) else '--'

    print(f"\n{'='*104}")
    print(f"  {config.candidate1} minus {config.candidate2}, bias correction {config.bias:+.2f} pp")
    print(f"{'='*104}")
    print(f"  {'region':<22} {'n':>4} {'first':>11} {'last':>11} {'mean':>7} {'std':>7} "
          f"{'t':>8} {'p(c1)':>7}   call")
    print(f"  {'-'*102}")

    winners = calls.set_index('region')['winner']
    for _, row in summary.iterrows():
        print(
            f"  {str(row['region']):<22} "
            f"{int(row['n_polls']):>4} "
            f"{fmt_date(row['first_poll_date']):>11} "
            f"{fmt_date(row['last_poll_date']):>11} "
            f"{fmt(row['mean_gap']):>7} "
            f"{fmt(row['stdev_gap']):>7} "
            f"{fmt(row['t_statistic']):>8} "
            f"{fmt(row['p_candidate1'], 3):>7}   "
            f"{winners[row['region']]}"
        )

    print(f"{'='*104}\n")


def run(config: RunConfig, polls: Optional[pd.DataFrame] = None) -> PipelineResult:
    """
    one batch pass: load (unless polls are handed in), filter, gaps, inference, calls

    regions left with a single poll come out as "insufficient data", which is a normal result
    """
    if polls is None:
        polls = load_polls(config.source)

    filtered = apply_filters(polls, config.poll_filter)
    print(f"Poll rows after filtering: {len(filtered)} of {len(polls)}")

    gaps = compute_gaps(filtered, config.candidate1, config.candidate2, config.group_keys)
    n_questions = filtered['question_id'].nunique()
    print(f"Questions with both {config.candidate1} and {config.candidate2}: {len(gaps)}")
    print(f"Questions dropped for a missing candidate: {n_questions - gaps['question_id'].nunique()}")
    if len(gaps) > 0:
        print(f"Date range: {gaps['start_date'].min().date()} to {gaps['start_date'].max().date()}")

    summary = infer(gaps, config.bias)
    calls = call_winners(summary, config.candidate1, config.candidate2)

    print_summary_table(summary, calls, config)
    print(f"Calls:\n{calls['winner'].value_counts().to_string()}")

    return PipelineResult(filtered, gaps, summary, calls)
