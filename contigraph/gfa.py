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

from .contig_graph import ContigGraph
from .misc import get_open_func, parse_path_string, path_to_string, strand_char


class AssemblyGfa(object):
    """
    This class holds the parts of a compacted De Bruijn graph GFA file that are needed to rebuild
    sequences: segment sequences, links between segments and paths through the segments.
    """
    def __init__(self, gfa_filename=None):
        self.k_size = None
        self.contig_seqs = {}
        self.links = []  # (from_id, from_strand, to_id, to_strand) tuples
        self.paths = {}  # path ID -> list of (contig ID, strand) tuples
        if gfa_filename is not None:
            self.load(gfa_filename)

    def __repr__(self):
        return f'GFA: {len(self.contig_seqs)} segments, {len(self.links)} links, ' \
               f'{len(self.paths)} paths'

    def load(self, gfa_filename):
        with get_open_func(gfa_filename)(gfa_filename, 'rt') as f:
            for line in f:
                parts = line.rstrip('\n').split('\t')
                if parts[0] == 'H':
                    self.read_header_line(parts)
                elif parts[0] == 'S':
                    self.read_segment_line(parts)
                elif parts[0] == 'L':
                    self.read_link_line(parts)
                elif parts[0] == 'P':
                    self.read_path_line(parts)

    def read_header_line(self, parts):
        for p in parts:
            if p.startswith('KM:i:'):
                self.k_size = int(p[5:])

    def read_segment_line(self, parts):
        if len(parts) < 3:
            sys.exit('Error: GFA segment line has fewer than three columns')
        self.contig_seqs[parts[1]] = parts[2]

    def read_link_line(self, parts):
        if len(parts) < 5:
            sys.exit('Error: GFA link line has fewer than five columns')
        if parts[2] not in ('+', '-') or parts[4] not in ('+', '-'):
            sys.exit(f'Error: GFA link line has an invalid strand: {" ".join(parts[:5])}')
        self.links.append((parts[1], parts[2] == '+', parts[3], parts[4] == '+'))

    def read_path_line(self, parts):
        if len(parts) < 3:
            sys.exit('Error: GFA path line has fewer than three columns')
        path = parse_path_string(parts[2])
        if path is None:
            sys.exit(f'Error: could not parse path {parts[1]}: every step needs a + or - strand')
        self.paths[parts[1]] = path

    def choose_k_size(self, k_arg):
        """
        Returns the user-supplied k-mer size if there is one, otherwise the k-mer size from the GFA
        header.
        """
        if k_arg is not None:
            return k_arg
        if self.k_size is None:
            sys.exit('Error: could not find a k-mer tag (e.g. KM:i:31) in the GFA header line.\n'
                     'Please specify the k-mer size with --kmer.')
        if self.k_size < 1:
            sys.exit(f'Error: the GFA header k-mer size (KM:i:{self.k_size}) must be 1 or greater')
        return self.k_size

    def build_graph(self):
        graph = ContigGraph()
        for contig_id in self.contig_seqs:
            graph.add_node(contig_id)
        graph.add_links(self.links)
        return graph

    def save(self, gfa_filename, graph=None):
        """
        Saves the GFA to file. If a ContigGraph is given, its links are written (and only its nodes'
        segments and the paths that only use its nodes), otherwise everything that was loaded is
        written.
        """
        paths = self.paths
        if graph is None:
            contig_ids = list(self.contig_seqs)
            links = self.links
        else:
            contig_ids = [i for i in self.contig_seqs if graph.has_node(i)]
            links = list(graph.iterate_links())
            paths = {path_id: path for path_id, path in self.paths.items()
                     if all(graph.has_node(contig_id) for contig_id, _ in path)}
        with open(gfa_filename, 'wt') as f:
            f.write(self.header_line())
            for contig_id in contig_ids:
                f.write(f'S\t{contig_id}\t{self.contig_seqs[contig_id]}\n')
            for a, a_strand, b, b_strand in links:
                f.write(f'L\t{a}\t{strand_char(a_strand)}\t{b}\t{strand_char(b_strand)}\t*\n')
            for path_id, path in paths.items():
                f.write(f'P\t{path_id}\t{path_to_string(path)}\t*\n')

    def header_line(self):
        if self.k_size is None:
            return 'H\tVN:Z:1.0\n'
        return f'H\tVN:Z:1.0\tKM:i:{self.k_size}\n'
