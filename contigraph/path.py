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

from .misc import reverse_complement


def oriented_contig_seq(contig_seq, strand):
    return contig_seq if strand else reverse_complement(contig_seq)


def path_segments(path, contig_seqs, k_size):
    """
    Returns the sequence that each step of the path contributes, in path order. Each contig is
    reverse complemented if it's on the reverse strand, and every contig except the last has its
    final k-1 bases removed (they are repeated at the start of the next contig). Contigs that aren't
    longer than the overlap are used in full.

    Returns None if the path uses a contig that isn't in contig_seqs.
    """
    overlap = k_size - 1
    segments = []
    for i, (contig_id, strand) in enumerate(path):
        if contig_id not in contig_seqs:
            return None
        seg = oriented_contig_seq(contig_seqs[contig_id], strand)
        if i < len(path) - 1 and overlap > 0 and len(seg) > overlap:
            seg = seg[:-overlap]
        segments.append(seg)
    return segments


def reconstruct_path_sequence(path, contig_seqs, k_size):
    """
    Returns the sequence spelled out by a path of (contig ID, strand) steps, or None if the path
    uses a contig that isn't in contig_seqs.
    """
    segments = path_segments(path, contig_seqs, k_size)
    if segments is None:
        return None
    return ''.join(segments)


def contig_offsets(path, contig_seqs, k_size):
    """
    Returns the 0-based start of each step's contig in the path's reconstructed sequence.
    """
    segments = path_segments(path, contig_seqs, k_size)
    if segments is None:
        return None
    offsets, offset = [], 0
    for seg in segments:
        offsets.append(offset)
        offset += len(seg)
    return offsets


def reconstruct_all_paths(paths, contig_seqs, k_size):
    """
    Returns a dictionary of path ID -> reconstructed sequence (None for paths with missing
    contigs).
    """
    return {path_id: reconstruct_path_sequence(path, contig_seqs, k_size)
            for path_id, path in paths.items()}
