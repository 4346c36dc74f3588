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

import collections

from .kmer import iterate_kmers
from .path import contig_offsets
from .position import Position, ProjectedHits


class ContigKmer(object):
    """
    One occurrence of a k-mer in a contig: the contig, the k-mer's 0-based start and the k-mer's
    forward word as it reads on the contig's forward strand.
    """
    def __init__(self, contig_id, pos, forward_word):
        self.contig_id = contig_id
        self.pos = pos
        self.forward_word = forward_word

    def __repr__(self):
        return f'{self.contig_id}:{self.pos}'


class ContigIndex(object):
    """
    This class indexes every k-mer of every contig by its canonical word, and stores where each
    contig lies on the reference sequences (worked out from the paths). Together, these let a query
    k-mer be placed on the reference sequences.
    """
    def __init__(self, k_size):
        self.k_size = k_size
        self.kmers = collections.defaultdict(list)
        self.contig_lengths = {}
        self.contig_positions = collections.defaultdict(list)
        self.transcript_names = []

    def __repr__(self):
        return f'index: {len(self.kmers)} k-mers, {len(self.contig_lengths)} contigs, ' \
               f'{len(self.transcript_names)} references'

    def add_contigs(self, contig_seqs):
        for contig_id, seq in contig_seqs.items():
            self.contig_lengths[contig_id] = len(seq)
            for pos, kmer in iterate_kmers(seq, self.k_size):
                self.kmers[kmer.canonical_word()].append(ContigKmer(contig_id, pos, kmer.forward))

    def add_paths(self, paths, contig_seqs):
        """
        Records the reference position of each contig in each path. Transcript IDs are the paths'
        indices in self.transcript_names. Returns the IDs of paths that could not be placed because
        they use a missing contig.
        """
        skipped = []
        for path_name, path in paths.items():
            offsets = contig_offsets(path, contig_seqs, self.k_size)
            if offsets is None:
                skipped.append(path_name)
                continue
            transcript_id = len(self.transcript_names)
            self.transcript_names.append(path_name)
            for (contig_id, strand), offset in zip(path, offsets):
                self.contig_positions[contig_id].append(Position(transcript_id, offset, strand))
        return skipped

    def lookup(self, kmer):
        """
        Returns a list of ProjectedHits, one for each occurrence of the k-mer (on either strand) in
        the contigs.
        """
        hits = []
        for occurrence in self.kmers.get(kmer.canonical_word(), []):
            hits.append(ProjectedHits(occurrence.pos, occurrence.forward_word == kmer.forward,
                                      self.contig_lengths[occurrence.contig_id], self.k_size,
                                      self.contig_positions.get(occurrence.contig_id, [])))
        return hits

    def locate(self, kmer):
        """
        Returns a list of (reference name, RefPos) tuples for every place the k-mer occurs in the
        reference sequences.
        """
        locations = []
        for hits in self.lookup(kmer):
            for transcript_id, ref_pos in hits.decode_hits():
                locations.append((self.transcript_names[transcript_id], ref_pos))
        return locations

    def locate_seq(self, seq):
        """
        Yields (query position, reference name, RefPos) tuples for all k-mers in a query sequence.
        """
        for query_pos, kmer in iterate_kmers(seq, self.k_size):
            for name, ref_pos in self.locate(kmer):
                yield query_pos, name, ref_pos
