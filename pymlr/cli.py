"""
The mlr command.

Reads whitespace-delimited records (first column y, then X1, X2, ...) from
a file or stdin, fits them by ordinary least squares and prints the
coefficients, constant first.

Usage:
    mlr data.txt
    mlr --stats data.txt
    cat data.txt | mlr -n -
    mlr --format json data.csv
"""

import argparse
import sys

from pymlr import __version__
from pymlr.core.datasource import DataSource
from pymlr.core.exceptions import PyMLRError
from pymlr.formatters import FORMATS, render
from pymlr.regression.solvers import multiple_linear_regression


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='mlr',
        description='Multiple linear regression by ordinary least squares.',
        epilog=(
            "The datafile is expected to be whitespace delimited, with the first "
            "column being Y, followed by X1, X2, ... columns. Lines that do not "
            "match the most common column count, or hold non-numeric tokens, are "
            "discarded. Files ending in .csv are read with a header row."
        ),
    )
    parser.add_argument(
        'datafile',
        nargs='?',
        default='-',
        help="Data file, or '-' (the default) to read stdin",
    )
    parser.add_argument(
        '--no-const', '-n',
        action='store_true',
        help="Don't add a constant to the regression coefficients",
    )
    parser.add_argument(
        '--stats', '-s',
        action='store_true',
        help='Also print goodness-of-fit statistics (text format)',
    )
    parser.add_argument(
        '--format', '-f',
        choices=FORMATS,
        default='text',
        help='Output format (default: text)',
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        if args.datafile == '-':
            source = DataSource.from_text(sys.stdin.read())
        else:
            source = DataSource.from_file(args.datafile)

        solution = multiple_linear_regression(
            source['y'],
            source['X'],
            compute_advanced_stats=args.format != 'text',
            add_constant=not args.no_const,
        )
    except PyMLRError as e:
        print(f"mlr: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(render(solution, args.format, stats=args.stats))
    return 0
