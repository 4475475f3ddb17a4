import warnings
from typing import Iterable, NamedTuple, Optional

import numpy as np
import pandas as pd
from scipy import stats

from pollcall.regions import summarize


class WinProbability(NamedTuple):
    """Outcome of the bias-corrected test for one region; None means undefined."""
    t_statistic: Optional[float]
    p_candidate1: Optional[float]


UNDEFINED = WinProbability(None, None)


def win_probability(gaps: Iterable[float], candidate1_bias: float = 0.0) -> WinProbability:
    """
    probability that candidate1's true margin is above zero once the bias is taken out

    every gap is shifted by -candidate1_bias (polls assumed to overstate candidate1 by that much),
    then a one-sample t-test of H0: mean = 0 against H1: mean < 0 is run on the shifted sample
    that p-value is the t cdf (n - 1 degrees of freedom) at the statistic, which by symmetry is the
    mass of the t distribution fitted around the sample mean that lies above zero, so it is
    returned as p_candidate1 (candidate1 trailing is the complement)

    fewer than 2 gaps, zero variance, or any numerical failure in the test gives UNDEFINED,
    never an exception and never a stand-in value like 0.5
    """
    values = np.asarray(list(gaps), dtype=float)
    values = values[~np.isnan(values)]

    # need at least two points to estimate dispersion
    if len(values) < 2:
        return UNDEFINED

    shifted = values - candidate1_bias

    # a constant sample has no t distribution to fit
    if not np.std(shifted, ddof=1) > 0:
        return UNDEFINED

    try:
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', RuntimeWarning)
            result = stats.ttest_1samp(shifted, popmean=0.0, alternative='less')
    except (ValueError, FloatingPointError, ZeroDivisionError):
        return UNDEFINED

    t_stat = float(result.statistic)
    p_value = float(result.pvalue)
    if not (np.isfinite(t_stat) and np.isfinite(p_value)):
        return UNDEFINED

    return WinProbability(t_stat, p_value)


def infer(gaps: pd.DataFrame, candidate1_bias: float = 0.0) -> pd.DataFrame:
    """region summary with the bias-corrected t statistic and candidate1 win probability added"""
    summary = summarize(gaps)
    gaps_by_region = gaps.groupby('region', observed=True)['pct_diff']

    results = [win_probability(gaps_by_region.get_group(region), candidate1_bias)
               for region in summary['region']]

    summary['bias_correction'] = float(candidate1_bias)
    # nullable floats keep "undefined" (NA) apart from any real probability
    summary['t_statistic'] = pd.array([r.t_statistic for r in results], dtype='Float64')
    summary['p_candidate1'] = pd.array([r.p_candidate1 for r in results], dtype='Float64')

    return summary


def bias_sweep(gaps: pd.DataFrame, biases: Iterable[float]) -> pd.DataFrame:
    """
    re-runs the inference for each assumed bias, one row per region x bias

    for a fixed sample p_candidate1 can only fall as the bias grows
    """
    sweeps = [
        infer(gaps, bias)[['region', 'bias_correction', 't_statistic', 'p_candidate1']]
        for bias in biases
    ]
    if not sweeps:
        return pd.DataFrame(columns=['region', 'bias_correction', 't_statistic', 'p_candidate1'])

    return (
        pd.concat(sweeps, ignore_index=True)
        .sort_values(['region', 'bias_correction'], kind='stable')
        .reset_index(drop=True)
    )
