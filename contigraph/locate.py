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

import sys

from .gfa import AssemblyGfa
from .index import ContigIndex
from .kmer import MAX_K_SIZE
from .misc import iterate_fasta, strand_char


def locate(args):
    print(f'\nLoading {args.in_gfa}...', flush=True, end='', file=sys.stderr)
    gfa = AssemblyGfa(args.in_gfa)
    print(f' {len(gfa.contig_seqs)} segments, {len(gfa.paths)} paths', file=sys.stderr)
    k_size = gfa.choose_k_size(args.kmer)
    if k_size > MAX_K_SIZE:
        sys.exit(f'Error: k-mer size cannot be larger than {MAX_K_SIZE} for locate')

    print(f'Indexing contig k-mers (k={k_size})...', flush=True, end='', file=sys.stderr)
    index = build_index(gfa, k_size)
    print(f' {index}', file=sys.stderr)

    # Hits go to stdout, so progress messages go to stderr.
    hit_count = 0
    for name, _, seq in iterate_fasta(args.query):
        query_hits = 0
        for query_pos, ref_name, ref_pos in index.locate_seq(seq):
            print(f'{name}\t{query_pos}\t{ref_name}\t{ref_pos.pos}\t'
                  f'{strand_char(ref_pos.is_forward)}')
            query_hits += 1
        if args.verbose:
            print(f'  {name}: {len(seq)} bp, {query_hits} hits', file=sys.stderr)
        hit_count += query_hits
    print(f'\n{hit_count} hits', file=sys.stderr)


def build_index(gfa, k_size):
    index = ContigIndex(k_size)
    index.add_contigs(gfa.contig_seqs)
    skipped = index.add_paths(gfa.paths, gfa.contig_seqs)
    if skipped:
        sys.exit(f'Error: path {skipped[0]} uses a segment which is not in the GFA')
    return index
