"""Per-region winner calls from public polling, with an optional bias correction."""

from pollcall.config import PollFilter, RunConfig
from pollcall.feed import FeedError, load_polls, prepare_polls
from pollcall.filters import apply_filters
from pollcall.gaps import compute_gaps
from pollcall.regions import summarize
from pollcall.inference import WinProbability, win_probability, infer, bias_sweep
from pollcall.winner import INSUFFICIENT_DATA, TIE, classify, call_winners
from pollcall.pipeline import PipelineResult, run

__version__ = '0.1.0'
