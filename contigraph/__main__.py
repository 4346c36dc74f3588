"""
Copyright 2024 Ryan Wick (rrwick@gmail.com)

This program is free software: you can redistribute it and/or modify it under the terms of the GNU
General Public License as published by the Free Software Foundation, either version 3 of the
License, or (at your option) any later version.

This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without
even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU
General Public License for more details.

You should have received a copy of the GNU General Public License along with this program. If not,
see <https://www.gnu.org/licenses/>.
"""

import argparse
import pathlib
import sys

from .help_formatter import MyParser, MyHelpFormatter
from .locate import locate
from .reconstruct import reconstruct
from .simplify import simplify
from .validate import validate

__version__ = '0.1.0'


def main(args=None):
    args = parse_args(sys.argv[1:] if args is None else args)

    if args.subparser_name == 'reconstruct':
        check_kmer_arg(args)
        reconstruct(args)
    elif args.subparser_name == 'validate':
        check_kmer_arg(args)
        validate(args)
    elif args.subparser_name == 'simplify':
        simplify(args)
    elif args.subparser_name == 'locate':
        check_kmer_arg(args)
        locate(args)


def parse_args(args):
    description = 'Contigraph: tools for oriented contig graphs from compacted De Bruijn graphs'
    parser = MyParser(description=description, formatter_class=MyHelpFormatter, add_help=False)

    subparsers = parser.add_subparsers(title='Commands', dest='subparser_name')
    reconstruct_subparser(subparsers)
    validate_subparser(subparsers)
    simplify_subparser(subparsers)
    locate_subparser(subparsers)

    longest_choice_name = max(len(c) for c in subparsers.choices)
    subparsers.help = 'R|'
    for choice, choice_parser in subparsers.choices.items():
        padding = ' ' * (longest_choice_name - len(choice))
        subparsers.help += choice + ': ' + padding
        d = choice_parser.description
        subparsers.help += d[0].lower() + d[1:]  # don't capitalise the first letter
        subparsers.help += '\n'

    help_args = parser.add_argument_group('Help')
    help_args.add_argument('-h', '--help', action='help', default=argparse.SUPPRESS,
                           help='Show this help message and exit')
    help_args.add_argument('--version', action='version', version='Contigraph v' + __version__,
                           help="Show program's version number and exit")

    # If no arguments were used, print the base-level help which lists possible commands.
    if len(args) == 0:
        parser.print_help(file=sys.stderr)
        sys.exit(1)

    return parser.parse_args(args)


def reconstruct_subparser(subparsers):
    group = subparsers.add_parser('reconstruct',
                                  description='rebuild path sequences from a GFA graph',
                                  formatter_class=MyHelpFormatter, add_help=False)

    required_args = group.add_argument_group('Required')
    required_args.add_argument('-i', '--in_gfa', type=pathlib.Path, required=True,
                               help='GFA file with segments and paths')
    required_args.add_argument('-o', '--out_fasta', type=pathlib.Path, required=True,
                               help='FASTA file of reconstructed sequences (can be gzipped)')

    setting_args = group.add_argument_group('Settings')
    add_kmer_arg(setting_args)
    setting_args.add_argument('--verbose', action='store_true',
                              help='Display more output information')
    add_other_args(group)


def validate_subparser(subparsers):
    group = subparsers.add_parser('validate',
                                  description='check GFA paths rebuild their reference sequences',
                                  formatter_class=MyHelpFormatter, add_help=False)

    required_args = group.add_argument_group('Required')
    required_args.add_argument('-i', '--in_gfa', type=pathlib.Path, required=True,
                               help='GFA file with segments and paths')
    required_args.add_argument('-r', '--ref', type=pathlib.Path, required=True,
                               help='FASTA file of reference sequences, named as the GFA paths')

    setting_args = group.add_argument_group('Settings')
    add_kmer_arg(setting_args)
    setting_args.add_argument('--verbose', action='store_true',
                              help='Display more output information')
    add_other_args(group)


def simplify_subparser(subparsers):
    group = subparsers.add_parser('simplify',
                                  description='remove nodes from a GFA graph, keeping their paths',
                                  formatter_class=MyHelpFormatter, add_help=False)

    required_args = group.add_argument_group('Required')
    required_args.add_argument('-i', '--in_gfa', type=pathlib.Path, required=True,
                               help='GFA file with segments and links')
    required_args.add_argument('-o', '--out_gfa', type=pathlib.Path, required=True,
                               help='Filename of simplified GFA')

    setting_args = group.add_argument_group('Settings')
    setting_args.add_argument('--remove', type=str, nargs='+', default=[],
                              help='Segment IDs to remove (their neighbours are linked together)')
    add_other_args(group)


def locate_subparser(subparsers):
    group = subparsers.add_parser('locate',
                                  description='find reference positions of query k-mers',
                                  formatter_class=MyHelpFormatter, add_help=False)

    required_args = group.add_argument_group('Required')
    required_args.add_argument('-i', '--in_gfa', type=pathlib.Path, required=True,
                               help='GFA file with segments and paths')
    required_args.add_argument('-q', '--query', type=pathlib.Path, required=True,
                               help='FASTA file of query sequences (can be gzipped)')

    setting_args = group.add_argument_group('Settings')
    add_kmer_arg(setting_args)
    setting_args.add_argument('--verbose', action='store_true',
                              help='Display more output information')
    add_other_args(group)


def add_kmer_arg(setting_args):
    setting_args.add_argument('-k', '--kmer', type=int,
                              help='K-mer size used to build the graph '
                                   '(default: from the GFA header KM:i: tag)')


def add_other_args(group):
    other_args = group.add_argument_group('Other')
    other_args.add_argument('-h', '--help', action='help', default=argparse.SUPPRESS,
                            help='Show this help message and exit')
    other_args.add_argument('--version', action='version', version='Contigraph v' + __version__,
                            help="Show program's version number and exit")


def check_kmer_arg(args):
    if args.kmer is not None and args.kmer < 1:
        sys.exit('Error: --kmer must be 1 or greater')


if __name__ == '__main__':
    main()
