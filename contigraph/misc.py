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


REV_COMP_DICT = {'A': 'T', 'T': 'A', 'G': 'C', 'C': 'G', 'a': 't', 't': 'a', 'g': 'c', 'c': 'g',
                 'R': 'Y', 'Y': 'R', 'S': 'S', 'W': 'W', 'K': 'M', 'M': 'K', 'B': 'V', 'V': 'B',
                 'D': 'H', 'H': 'D', 'N': 'N', 'r': 'y', 'y': 'r', 's': 's', 'w': 'w', 'k': 'm',
                 'm': 'k', 'b': 'v', 'v': 'b', 'd': 'h', 'h': 'd', 'n': 'n', '.': '.', '-': '-',
                 '?': '?'}


def complement_base(base):
    try:
        return REV_COMP_DICT[base]
    except KeyError:
        return 'N'


def reverse_complement(seq):
    return ''.join([complement_base(x) for x in seq][::-1])


def reverse_complement_position(pos, seq_len, k_size=1):
    """
    Returns the start position of a k-mer on the reverse complement strand using 0-based indexing.
    With the default k_size of 1, this is the position of a single base.
    """
    return seq_len - pos - k_size


def strand_char(strand):
    return '+' if strand else '-'


def parse_path_string(path_str):
    """
    Takes a GFA path string (e.g. '12+,7-,33+') and returns it as a list of (contig ID, strand)
    tuples, where the strand is True for forward and False for reverse. Returns None if any step
    lacks a strand character.
    """
    path = []
    for step in path_str.split(','):
        step = step.strip()
        if not step:
            continue
        if len(step) < 2 or step[-1] not in '+-':
            return None
        path.append((step[:-1], step[-1] == '+'))
    return path


def path_to_string(path):
    return ','.join(f'{contig_id}{strand_char(strand)}' for contig_id, strand in path)


def get_compression_type(filename):
    """
    Attempts to guess the compression (if any) on a file using the first few bytes.
    http://stackoverflow.com/questions/13044562
    """
    magic_dict = {'gz': (b'\x1f', b'\x8b', b'\x08'),
                  'bz2': (b'\x42', b'\x5a', b'\x68'),
                  'zip': (b'\x50', b'\x4b', b'\x03', b'\x04')}
    max_len = max(len(x) for x in magic_dict.values())

    with open(str(filename), 'rb') as unknown_file:
        file_start = unknown_file.read(max_len)
    compression_type = 'plain'
    for file_type, magic_bytes in magic_dict.items():
        if file_start.startswith(b''.join(magic_bytes)):
            compression_type = file_type
    if compression_type == 'bz2':
        sys.exit('Error: cannot use bzip2 format - use gzip instead')
    if compression_type == 'zip':
        sys.exit('Error: cannot use zip format - use gzip instead')
    return compression_type


def get_open_func(filename):
    if get_compression_type(filename) == 'gz':
        return gzip.open
    else:  # plain text
        return open


def iterate_fasta(filename):
    """
    Takes a FASTA file as input and yields the contents as (name, info, seq) tuples.
    """
    with get_open_func(filename)(filename, 'rt') as fasta_file:
        name = ''
        sequence = []
        for line in fasta_file:
            line = line.strip()
            if not line:
                continue
            if line[0] == '>':  # Header line = start of new sequence
                if name:
                    yield split_header(name) + (''.join(sequence),)
                    sequence = []
                name = line[1:]
            else:
                sequence.append(line.upper())
        if name:
            yield split_header(name) + (''.join(sequence),)


def split_header(header):
    name_parts = header.split(maxsplit=1)
    info = '' if len(name_parts) == 1 else name_parts[1]
    return name_parts[0], info


def load_fasta_dict(filename):
    """
    Returns a dictionary of name -> sequence for a FASTA file. Only the first word of each header
    is used as the name.
    """
    return {name: seq for name, _, seq in iterate_fasta(filename)}
