"""
This module contains some tests for Contigraph. To run them, execute `pytest` from the root
Contigraph directory.

Copyright 2024 Ryan Wick (rrwick@gmail.com)

This file is part of Contigraph. Contigraph is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by the Free Software Foundation,
either version 3 of the License, or (at your option) any later version. Contigraph is distributed
in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License for more
details. You should have received a copy of the GNU General Public License along with Contigraph.
If not, see <https://www.gnu.org/licenses/>.
"""

import pytest

from contigraph.contig_graph import Edge
from contigraph.gfa import AssemblyGfa


GFA_TEXT = 'H\tVN:Z:1.0\tKM:i:4\n' \
           'S\t1\tACGTACG\n' \
           'S\t2\tACGTTTT\n' \
           'S\t3\tAAAACGT\n' \
           'L\t1\t+\t2\t+\t3M\n' \
           'L\t1\t+\t3\t-\t3M\n' \
           'P\tpath_a\t1+,2+\t*\n' \
           'P\tpath_b\t1+,3-\t*\n'


def write_gfa(tmp_path, text=GFA_TEXT):
    filename = tmp_path / 'graph.gfa'
    filename.write_text(text)
    return filename


def test_load(tmp_path):
    gfa = AssemblyGfa(write_gfa(tmp_path))
    assert gfa.k_size == 4
    assert gfa.contig_seqs == {'1': 'ACGTACG', '2': 'ACGTTTT', '3': 'AAAACGT'}
    assert gfa.links == [('1', True, '2', True), ('1', True, '3', False)]
    assert gfa.paths == {'path_a': [('1', True), ('2', True)],
                         'path_b': [('1', True), ('3', False)]}


def test_load_no_header(tmp_path):
    gfa = AssemblyGfa(write_gfa(tmp_path, 'S\t1\tACGT\n'))
    assert gfa.k_size is None
    assert gfa.contig_seqs == {'1': 'ACGT'}


def test_choose_k_size(tmp_path):
    gfa = AssemblyGfa(write_gfa(tmp_path))
    assert gfa.choose_k_size(None) == 4
    assert gfa.choose_k_size(31) == 31
    gfa.k_size = None
    with pytest.raises(SystemExit) as e:
        gfa.choose_k_size(None)
    assert 'k-mer tag' in str(e.value)


def test_choose_k_size_bad_header(tmp_path):
    gfa = AssemblyGfa(write_gfa(tmp_path, 'H\tVN:Z:1.0\tKM:i:0\nS\t1\tACGT\n'))
    assert gfa.k_size == 0
    assert gfa.choose_k_size(5) == 5
    with pytest.raises(SystemExit) as e:
        gfa.choose_k_size(None)
    assert 'KM:i:0' in str(e.value)


def test_bad_path(tmp_path):
    with pytest.raises(SystemExit) as e:
        AssemblyGfa(write_gfa(tmp_path, 'P\tp\t1+,2\t*\n'))
    assert 'could not parse path' in str(e.value)


def test_bad_link(tmp_path):
    with pytest.raises(SystemExit) as e:
        AssemblyGfa(write_gfa(tmp_path, 'L\t1\t*\t2\t+\t0M\n'))
    assert 'invalid strand' in str(e.value)


def test_build_graph(tmp_path):
    gfa = AssemblyGfa(write_gfa(tmp_path, GFA_TEXT + 'S\t4\tGGGG\n'))
    graph = gfa.build_graph()
    assert graph.node_count() == 4
    assert graph.edge_count() == 2
    assert graph.get_node('1').out_edges == [Edge(True, '2', True), Edge(True, '3', False)]
    assert graph.get_node('4').out_edges == []


def test_save_and_load(tmp_path):
    gfa = AssemblyGfa(write_gfa(tmp_path))
    filename = tmp_path / 'saved.gfa'
    gfa.save(filename)
    loaded = AssemblyGfa(filename)
    assert loaded.k_size == gfa.k_size
    assert loaded.contig_seqs == gfa.contig_seqs
    assert loaded.links == gfa.links
    assert loaded.paths == gfa.paths


def test_save_graph(tmp_path):
    gfa = AssemblyGfa(write_gfa(tmp_path))
    graph = gfa.build_graph()
    graph.remove_node('3')
    filename = tmp_path / 'saved.gfa'
    gfa.save(filename, graph=graph)
    loaded = AssemblyGfa(filename)
    assert loaded.contig_seqs == {'1': 'ACGTACG', '2': 'ACGTTTT'}
    assert loaded.links == [('1', True, '2', True)]
    assert loaded.paths == {'path_a': [('1', True), ('2', True)]}
