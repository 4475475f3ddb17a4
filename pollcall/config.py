import datetime
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

# FiveThirtyEight's running presidential poll file, fetched once per run
DEFAULT_FEED_URL = 'https://projects.fivethirtyeight.com/polls-page/data/president_polls.csv'

# columns the feed must carry, mapped to the names used downstream
FEED_COLUMNS = {
    'question_id':    'question_id',
    'state':          'region',
    'start_date':     'start_date',
    'end_date':       'end_date',
    'cycle':          'cycle',
    'fte_grade':      'pollster_grade',
    'sample_size':    'sample_size',
    'population':     'population_type',
    'candidate_name': 'candidate_name',
    'pct':            'pct',
}

# polls with no state in the feed are national polls
NATIONAL_REGION = 'National'

# accept pollsters graded A, B or C (any +/- or slash suffix)
DEFAULT_GRADE_PATTERN = '^[ABC]'

# pass-through columns kept on every gap row next to question_id
DEFAULT_GROUP_KEYS = ('region', 'start_date', 'pollster_grade')


@dataclass(frozen=True)
class PollFilter:
    """Row filters applied to the feed before gaps are computed.

    Every option left as None is inactive; active options combine with AND.
    """
    cycle: Optional[int] = None
    regions: Optional[FrozenSet[str]] = None
    grade_pattern: Optional[str] = DEFAULT_GRADE_PATTERN
    min_sample_size: Optional[int] = None
    min_start_date: Optional[datetime.date] = None
    population: Optional[str] = None


@dataclass(frozen=True)
class RunConfig:
    """Everything one batch run needs besides the poll snapshot itself.

    `bias` is the assumed systematic overstatement of candidate1's margin in
    percentage points; it is subtracted from every gap before testing.
    """
    candidate1: str
    candidate2: str
    bias: float = 0.0
    poll_filter: PollFilter = field(default_factory=PollFilter)
    group_keys: Tuple[str, ...] = DEFAULT_GROUP_KEYS
    source: str = DEFAULT_FEED_URL

    def __post_init__(self):
        if not self.candidate1 or not self.candidate2:
            raise ValueError('both candidate names must be given')
        if self.candidate1 == self.candidate2:
            raise ValueError(f'cannot compare {self.candidate1!r} with itself')
