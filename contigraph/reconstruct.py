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

import gzip
import sys

from .gfa import AssemblyGfa
from .path import reconstruct_path_sequence


def reconstruct(args):
    print(f'\nLoading {args.in_gfa}...', flush=True, end='')
    gfa = AssemblyGfa(args.in_gfa)
    print(f' {len(gfa.contig_seqs)} segments, {len(gfa.paths)} paths')
    k_size = gfa.choose_k_size(args.kmer)

    print(f'\nReconstructing path sequences (k={k_size}):')
    open_func = gzip.open if str(args.out_fasta).endswith('.gz') else open
    total_length = 0
    with open_func(args.out_fasta, 'wt') as f:
        for path_id, path in gfa.paths.items():
            seq = reconstruct_path_sequence(path, gfa.contig_seqs, k_size)
            if seq is None:
                sys.exit(f'Error: path {path_id} uses a segment which is not in the GFA')
            if args.verbose:
                print(f'  {path_id}: {len(path)} segments, {len(seq)} bp')
            total_length += len(seq)
            f.write(f'>{path_id}\n{seq}\n')
    print(f'  {len(gfa.paths)} sequences, {total_length} bp total, saved to {args.out_fasta}')
