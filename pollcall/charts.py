from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import plotly.express as px

# region names as they appear in the feed, mapped to plotly's USA-states codes
STATE_ABBREVIATIONS = {
    'Alabama': 'AL', 'Alaska': 'AK', 'Arizona': 'AZ', 'Arkansas': 'AR', 'California': 'CA',
    'Colorado': 'CO', 'Connecticut': 'CT', 'Delaware': 'DE', 'District of Columbia': 'DC',
    'Florida': 'FL', 'Georgia': 'GA', 'Hawaii': 'HI', 'Idaho': 'ID', 'Illinois': 'IL',
    'Indiana': 'IN', 'Iowa': 'IA', 'Kansas': 'KS', 'Kentucky': 'KY', 'Louisiana': 'LA',
    'Maine': 'ME', 'Maryland': 'MD', 'Massachusetts': 'MA', 'Michigan': 'MI', 'Minnesota': 'MN',
    'Mississippi': 'MS', 'Missouri': 'MO', 'Montana': 'MT', 'Nebraska': 'NE', 'Nevada': 'NV',
    'New Hampshire': 'NH', 'New Jersey': 'NJ', 'New Mexico': 'NM', 'New York': 'NY',
    'North Carolina': 'NC', 'North Dakota': 'ND', 'Ohio': 'OH', 'Oklahoma': 'OK', 'Oregon': 'OR',
    'Pennsylvania': 'PA', 'Rhode Island': 'RI', 'South Carolina': 'SC', 'South Dakota': 'SD',
    'Tennessee': 'TN', 'Texas': 'TX', 'Utah': 'UT', 'Vermont': 'VT', 'Virginia': 'VA',
    'Washington': 'WA', 'West Virginia': 'WV', 'Wisconsin': 'WI', 'Wyoming': 'WY',
}


def plot_support_histograms(
    polls: pd.DataFrame,
    candidates: Sequence[str],
    path: Optional[str] = None,
    bins: int = 20,
):
    """
    histogram of each candidate's pct across the filtered poll observations, one panel per candidate
    dashed line marks the mean; saved as a png when path is given
    """
    fig, axes = plt.subplots(1, len(candidates), figsize=(7 * len(candidates), 6), squeeze=False)

    for ax, name in zip(axes[0], candidates):
        pct = polls.loc[polls['candidate_name'] == name, 'pct'].astype(float)
        ax.hist(pct, bins=bins, alpha=0.7, edgecolor='black', linewidth=0.5)
        if len(pct) > 0:
            ax.axvline(pct.mean(), color='black', linestyle='--', linewidth=1,
                       label=f'mean = {pct.mean():.1f}')
            ax.legend()
        ax.set_xlabel('support in poll (pct)')
        ax.set_ylabel('poll questions')
        ax.set_title(f'{name}: poll support (n={len(pct)})')
        ax.grid(alpha=0.3)

    fig.tight_layout()
    if path is not None:
        fig.savefig(path, dpi=300, bbox_inches='tight')

    return fig


def plot_win_probability_map(
    calls: pd.DataFrame,
    candidate1: str,
    candidate2: str,
    path: Optional[str] = None,
):
    # only US states can be drawn, National and district-level regions are left off
    states = calls[calls['region'].isin(list(STATE_ABBREVIATIONS))].copy()
    states['state_code'] = states['region'].map(STATE_ABBREVIATIONS)
    # plotly wants plain floats, undefined probabilities show as blank states
    states['p_candidate1'] = states['p_candidate1'].astype('Float64').to_numpy(dtype='float64', na_value=np.nan)

    fig = px.choropleth(
        data_frame=states,
        locations='state_code',
        locationmode='USA-states',
        color='p_candidate1',
        color_continuous_scale='RdBu',
        range_color=[0, 1],
        hover_name='region',
        hover_data={'state_code': False, 'winner': True, 'p_candidate1': ':.3f'},
        labels={'p_candidate1': f'P({candidate1} ahead)', 'winner': 'call'},
    )
    fig.update_layout(
        title_text=f'{candidate1} vs {candidate2}: probability {candidate1} leads by state',
        geo_scope='usa',
    )

    if path is not None:
        fig.write_html(path)

    return fig
