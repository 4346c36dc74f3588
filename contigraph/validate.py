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
from .misc import load_fasta_dict
from .path import path_segments


class Mismatch(object):
    """
    Describes a path whose reconstructed sequence doesn't match its reference sequence.
    """
    def __init__(self, path_id, expected, reconstructed, path, segments):
        self.path_id = path_id
        self.expected = expected
        self.reconstructed = reconstructed
        self.path = path
        self.segments = segments

    def __repr__(self):
        return f'{self.path_id}: expected {self.expected_length()} bp, ' \
               f'reconstructed {self.reconstructed_length()} bp'

    def expected_length(self):
        return None if self.expected is None else len(self.expected)

    def reconstructed_length(self):
        return None if self.reconstructed is None else len(self.reconstructed)

    def first_difference(self):
        """
        Returns the 0-based index of the first base which differs (or the length of the shorter
        sequence if one is a prefix of the other). Returns None if either sequence is missing.
        """
        if self.expected is None or self.reconstructed is None:
            return None
        for i, (a, b) in enumerate(zip(self.expected, self.reconstructed)):
            if a != b:
                return i
        return min(len(self.expected), len(self.reconstructed))

    def report(self):
        if self.expected is None:
            first_line = f'Error: no reference sequence for path {self.path_id}'
        else:
            first_line = 'Error: reconstructed sequence does not match reference for ' \
                         f'{self.path_id}'
        lines = [first_line,
                 f'  reference:     {self.expected_length()} bp  {self.expected}',
                 f'  reconstructed: {self.reconstructed_length()} bp  {self.reconstructed}',
                 f'  first difference at: {self.first_difference()}',
                 f'  number of contigs: {len(self.path)}']
        if self.segments is not None:
            for (contig_id, strand), seg in zip(self.path, self.segments):
                lines.append(f'    {contig_id}{"+" if strand else "-"} {seg}')
        return '\n'.join(lines)


def check_path(path_id, path, expected, contig_seqs, k_size):
    """
    Reconstructs one path and compares it to the expected sequence. Returns None when they match,
    otherwise a Mismatch.
    """
    segments = path_segments(path, contig_seqs, k_size)
    reconstructed = None if segments is None else ''.join(segments)
    if expected is not None and reconstructed == expected:
        return None
    return Mismatch(path_id, expected, reconstructed, path, segments)


def validate_paths(paths, contig_seqs, references, k_size, verbose=False):
    """
    Checks every reference sequence against its path, then every path that has no reference
    sequence (which always fails). Returns the number of matching sequences and the first Mismatch
    (None if all matched).
    """
    found = 0
    for ref_id in validation_ids(paths, references):
        path = paths.get(ref_id, [])
        ref_seq = references.get(ref_id)
        mismatch = check_path(ref_id, path, ref_seq, contig_seqs, k_size)
        if mismatch is not None:
            return found, mismatch
        if verbose:
            print(f'  {ref_id}: {len(ref_seq)} bp, {len(path)} contigs')
        found += 1
    return found, None


def validation_ids(paths, references):
    return list(references) + [path_id for path_id in paths if path_id not in references]


def validate(args):
    print(f'\nLoading {args.in_gfa}...', flush=True, end='')
    gfa = AssemblyGfa(args.in_gfa)
    print(f' {len(gfa.contig_seqs)} segments, {len(gfa.paths)} paths')
    k_size = gfa.choose_k_size(args.kmer)

    print(f'Loading {args.ref}...', flush=True, end='')
    references = load_fasta_dict(args.ref)
    print(f' {len(references)} sequences')

    print(f'\nChecking reconstructed sequences (k={k_size}):')
    found, mismatch = validate_paths(gfa.paths, gfa.contig_seqs, references, k_size,
                                     verbose=args.verbose)
    if mismatch is not None:
        total = len(validation_ids(gfa.paths, references))
        print(f'  Found {found} Not Found {total - found}')
        sys.exit(mismatch.report())
    print(f'  Found {found} Not Found 0')
