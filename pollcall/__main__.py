"""Call the likely winner in each region from a snapshot of public polls.

Loads the poll feed once, filters it, takes the candidate1 minus candidate2
margin of every poll question, and runs a bias-corrected one-sided t-test per
region to get the probability that candidate1 leads.
"""

import argparse
import contextlib
import datetime
import sys

from pollcall.charts import plot_support_histograms, plot_win_probability_map
from pollcall.config import DEFAULT_FEED_URL, DEFAULT_GRADE_PATTERN, PollFilter, RunConfig
from pollcall.pipeline import run


def _date(value):
    return datetime.datetime.strptime(value, '%Y-%m-%d').date()


argparser = argparse.ArgumentParser(
    prog='pollcall',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument('candidate1', help='first candidate, positive gaps favour them')
argparser.add_argument('candidate2', help='second candidate')
argparser.add_argument(
    '-s', '--source',
    default=DEFAULT_FEED_URL,
    help='poll feed to load, a csv path or url',
)
argparser.add_argument(
    '-b', '--bias',
    type=float,
    default=0.0,
    help='assumed overstatement of candidate1 in the polls, in percentage points',
)
argparser.add_argument('--cycle', type=int, help='only use polls from this election cycle')
argparser.add_argument('--region', nargs='*', dest='regions', help='only use polls from these regions')
argparser.add_argument(
    '--grades',
    default=DEFAULT_GRADE_PATTERN,
    help='regular expression the pollster grade must start with',
)
argparser.add_argument('--any-grade', action='store_true', help='do not filter on pollster grade')
argparser.add_argument('--min-sample-size', type=int, help='smallest sample size to accept')
argparser.add_argument('--since', type=_date, help='earliest poll start date, YYYY-MM-DD')
argparser.add_argument('--population', help='only use this population type, e.g. lv or rv')
argparser.add_argument('-o', '--output', help='write the per-region calls to this csv')
argparser.add_argument('--histogram', help='save support histograms to this image file')
argparser.add_argument('--map', help='save the win probability map to this html file')
argparser.add_argument('--log', help='send the run report to this file instead of stdout')


def main(argv=None):
    args = argparser.parse_args(argv)

    config = RunConfig(
        candidate1=args.candidate1,
        candidate2=args.candidate2,
        bias=args.bias,
        source=args.source,
        poll_filter=PollFilter(
            cycle=args.cycle,
            regions=frozenset(args.regions) if args.regions else None,
            grade_pattern=None if args.any_grade else args.grades,
            min_sample_size=args.min_sample_size,
            min_start_date=args.since,
            population=args.population,
        ),
    )

    with contextlib.ExitStack() as stack:
        if args.log:
            log_file = stack.enter_context(open(args.log, 'w'))
            stack.enter_context(contextlib.redirect_stdout(log_file))

        result = run(config)

        if args.output:
            result.summary.merge(result.calls[['region', 'winner']], on='region').to_csv(args.output, index=False)
            print(f"Calls written to {args.output}")
        if args.histogram:
            plot_support_histograms(result.polls, [config.candidate1, config.candidate2], args.histogram)
            print(f"Histograms written to {args.histogram}")
        if args.map:
            plot_win_probability_map(result.calls, config.candidate1, config.candidate2, args.map)
            print(f"Map written to {args.map}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
