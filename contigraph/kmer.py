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

MAX_K_SIZE = 32  # k-mers are packed into a single 64-bit word
MASK_64 = 0xFFFFFFFFFFFFFFFF

BASE_TO_CODE = {'A': 0, 'C': 1, 'G': 2, 'T': 3, 'a': 0, 'c': 1, 'g': 2, 't': 3}
CODE_TO_BASE = 'ACGT'
INVALID_BASE = 'N'


def encode_base(base):
    """
    Returns the 2-bit code for a base, or -1 if the base isn't A, C, G or T.
    """
    return BASE_TO_CODE.get(base, -1)


def decode_base(code):
    return CODE_TO_BASE[code]


def complement_code(code):
    return 3 - code


def word_mask(k_size):
    return (1 << (2 * k_size)) - 1


def encode_seq(seq):
    """
    Packs a sequence into an integer, first base in the highest bits. Returns None if the sequence
    contains a non-ACGT character.
    """
    word = 0
    for base in seq:
        code = encode_base(base)
        if code == -1:
            return None
        word = (word << 2) | code
    return word


def decode_word(word, k_size):
    bases = []
    for i in range(k_size - 1, -1, -1):
        bases.append(CODE_TO_BASE[(word >> (2 * i)) & 3])
    return ''.join(bases)


def reverse_complement_word(word, k_size):
    """
    Returns the reverse complement of a packed k-mer. The complement is a bitwise NOT (A<->T and
    C<->G are bitwise inverses in this encoding) and the reversal swaps ever-larger groups of bits
    across the 64-bit word, after which the k-mer sits in the top 2k bits and is shifted down.
    """
    w = ~(word & word_mask(k_size)) & MASK_64
    w = ((w >> 2) & 0x3333333333333333) | ((w & 0x3333333333333333) << 2)
    w = ((w >> 4) & 0x0F0F0F0F0F0F0F0F) | ((w & 0x0F0F0F0F0F0F0F0F) << 4)
    w = ((w >> 8) & 0x00FF00FF00FF00FF) | ((w & 0x00FF00FF00FF00FF) << 8)
    w = ((w >> 16) & 0x0000FFFF0000FFFF) | ((w & 0x0000FFFF0000FFFF) << 16)
    w = (w >> 32) | ((w << 32) & MASK_64)
    return w >> (64 - 2 * k_size)


class CanonicalKmer(object):
    """
    CanonicalKmer objects hold a k-mer on both strands at once: the forward word and its reverse
    complement. Both words are updated together by every load/extend method, so the canonical word
    (the smaller of the two) is always available without recomputing a reverse complement.

    Comparisons (==, <, hash, etc.) only look at the forward word, so two objects holding a k-mer
    and its reverse complement are not equal. Use same_canonical to test that instead.
    """
    def __init__(self, k_size, seq=None):
        if not 1 <= k_size <= MAX_K_SIZE:
            raise ValueError(f'k-mer size must be between 1 and {MAX_K_SIZE}, not {k_size}')
        self.k_size = k_size
        self.mask = word_mask(k_size)
        self.top_shift = 2 * (k_size - 1)  # bit offset of the first base

        self.forward = 0
        self.reverse = 0
        if seq is not None:
            self.load_from_string(seq)

    def __repr__(self):
        return f'{self.to_str()}/{decode_word(self.reverse, self.k_size)}'

    def __str__(self):
        return self.to_str()

    def __eq__(self, other):
        return self.k_size == other.k_size and self.forward == other.forward

    def __ne__(self, other):
        return not self.__eq__(other)

    def __lt__(self, other):
        return self.forward < other.forward

    def __le__(self, other):
        return self.forward <= other.forward

    def __gt__(self, other):
        return self.forward > other.forward

    def __ge__(self, other):
        return self.forward >= other.forward

    def __hash__(self):
        return hash((self.k_size, self.forward))

    def length(self):
        return self.k_size

    def copy(self):
        kmer = CanonicalKmer(self.k_size)
        kmer.forward, kmer.reverse = self.forward, self.reverse
        return kmer

    def load_from_string(self, seq):
        """
        Loads the first k bases of the given sequence. The forward word is built left-to-right and
        the reverse word right-to-left, so no separate reverse complement pass is needed. Returns
        False (and leaves the k-mer unchanged) if the sequence is too short or has a non-ACGT base
        in its first k positions.
        """
        if len(seq) < self.k_size:
            return False
        forward, reverse = 0, 0
        for base in seq[:self.k_size]:
            code = encode_base(base)
            if code == -1:
                return False
            forward = ((forward << 2) | code) & self.mask
            reverse = (reverse >> 2) | (complement_code(code) << self.top_shift)
        self.forward, self.reverse = forward, reverse
        return True

    def load_from_word(self, word):
        self.forward = word & self.mask
        self.reverse = reverse_complement_word(self.forward, self.k_size)

    def extend_right(self, base):
        """
        Adds a base to the end of the forward k-mer (and its complement to the start of the reverse
        k-mer). Returns the base that fell off the start of the forward k-mer, or 'N' if the given
        base was invalid (in which case nothing changes).
        """
        code = encode_base(base)
        if code == -1:
            return INVALID_BASE
        evicted = self.forward >> self.top_shift
        self.forward = ((self.forward << 2) | code) & self.mask
        self.reverse = (self.reverse >> 2) | (complement_code(code) << self.top_shift)
        return decode_base(evicted)

    def extend_left(self, base):
        """
        Adds a base to the start of the forward k-mer (and its complement to the end of the reverse
        k-mer). Returns the base that fell off the end of the forward k-mer, or 'N' if the given
        base was invalid (in which case nothing changes).
        """
        code = encode_base(base)
        if code == -1:
            return INVALID_BASE
        evicted = self.forward & 3
        self.forward = (self.forward >> 2) | (code << self.top_shift)
        self.reverse = ((self.reverse << 2) | complement_code(code)) & self.mask
        return decode_base(evicted)

    def canonical_word(self):
        # Palindromes (forward == reverse) get the forward word.
        return self.forward if self.forward <= self.reverse else self.reverse

    def canonical_str(self):
        return decode_word(self.canonical_word(), self.k_size)

    def is_forward_canonical(self):
        return self.forward <= self.reverse

    def same_canonical(self, other):
        return self.k_size == other.k_size and self.canonical_word() == other.canonical_word()

    def is_homopolymer(self):
        first_code = self.forward >> self.top_shift
        return self.forward == first_code * (self.mask // 3)  # mask // 3 == 0b0101...01

    def to_str(self):
        return decode_word(self.forward, self.k_size)

    def reverse_str(self):
        return decode_word(self.reverse, self.k_size)


def iterate_kmers(seq, k_size):
    """
    Slides a k-mer window along the sequence, yielding (offset, CanonicalKmer) tuples. The same
    CanonicalKmer object is yielded each time, so callers must copy it if they keep it. A non-ACGT
    base empties the window, which restarts on the following base.
    """
    kmer = CanonicalKmer(k_size)
    filled = 0
    for i, base in enumerate(seq):
        if kmer.extend_right(base) == INVALID_BASE:
            filled = 0
            continue
        filled += 1
        if filled >= k_size:
            yield i - k_size + 1, kmer
