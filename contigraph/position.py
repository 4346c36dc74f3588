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

from .misc import reverse_complement_position


ORIENTATION_BIT = 1 << 31
POS_MASK = ORIENTATION_BIT - 1

RefPos = collections.namedtuple('RefPos', ['pos', 'is_forward'])


class Position(object):
    """
    Position objects store where a contig occurs in a reference sequence (transcript). The offset
    and the contig's strand on the reference are packed into one 32-bit value: the low 31 bits hold
    the 0-based offset and the top bit is set when the contig is on the forward strand.
    """
    def __init__(self, transcript_id, pos, orientation):
        self.transcript_id = transcript_id
        self.packed_pos = pos & POS_MASK
        self.set_orientation(orientation)

    def __repr__(self):
        return f'{self.transcript_id}{"+" if self.orientation() else "-"}{self.pos()}'

    def __eq__(self, other):
        return self.transcript_id == other.transcript_id and self.packed_pos == other.packed_pos

    def __hash__(self):
        return hash((self.transcript_id, self.packed_pos))

    def set_orientation(self, orientation):
        if orientation:
            self.packed_pos |= ORIENTATION_BIT
        else:
            self.packed_pos &= POS_MASK

    def pos(self):
        return self.packed_pos & POS_MASK

    def orientation(self):
        return (self.packed_pos & ORIENTATION_BIT) > 0


class ProjectedHits(object):
    """
    This class holds a k-mer hit on a contig (where the k-mer is on the contig and on which strand)
    along with all of the contig's reference positions, so the hit can be converted into reference
    coordinates.
    """
    def __init__(self, contig_pos, contig_orientation, contig_len, k_size, ref_positions=None):
        self.contig_pos = contig_pos  # 0-based start of the k-mer on the contig
        self.contig_orientation = contig_orientation  # True if the k-mer is forward on the contig
        self.contig_len = contig_len
        self.k_size = k_size
        self.ref_positions = [] if ref_positions is None else ref_positions

    def __repr__(self):
        strand = '+' if self.contig_orientation else '-'
        return f'{strand}{self.contig_pos} on {self.contig_len} bp contig: {self.ref_positions}'

    def empty(self):
        return len(self.ref_positions) == 0

    def decode_hit(self, p):
        """
        Returns the reference position and strand of the k-mer for one of the contig's reference
        positions.

        If the contig is forward on the reference, the k-mer's offset is just added to the contig's
        offset and the k-mer keeps its strand:
          k-mer:          AGC            or            GCT
          contig:     ACTTAGC                      ACTTAGC
          ref:    GCA[ACTTAGC]CA               GCA[ACTTAGC]CA

        If the contig is reverse on the reference, the offset is measured from the contig's other
        end and the k-mer's strand flips:
          k-mer:          AGT            or            ACT
          contig:     GCTAAGT                      GCTAAGT
          ref:    GCA[ACTTAGC]CA               GCA[ACTTAGC]CA
        """
        if p.orientation():
            return RefPos(p.pos() + self.contig_pos, self.contig_orientation)
        else:
            offset = reverse_complement_position(self.contig_pos, self.contig_len, self.k_size)
            return RefPos(p.pos() + offset, not self.contig_orientation)

    def decode_hits(self):
        """
        Returns a list of (transcript ID, RefPos) tuples, one for each reference position.
        """
        return [(p.transcript_id, self.decode_hit(p)) for p in self.ref_positions]
