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

from contigraph.contig_graph import ContigGraph, Edge, EdgeType
import contigraph.contig_graph


def build_chain():
    # A+ -> B+ -> C+
    g = ContigGraph()
    g.add_edge('A', True, 'B', True)
    g.add_edge('B', True, 'C', True)
    return g


def all_edges(g):
    return [(n.contig_id, e) for n in g.nodes.values() for e in n.out_edges + n.in_edges]


def test_edge_type_from_strands():
    assert contigraph.contig_graph.edge_type_from_strands(True, True) == EdgeType.PLUS_PLUS
    assert contigraph.contig_graph.edge_type_from_strands(True, False) == EdgeType.PLUS_MINUS
    assert contigraph.contig_graph.edge_type_from_strands(False, True) == EdgeType.MINUS_PLUS
    assert contigraph.contig_graph.edge_type_from_strands(False, False) == EdgeType.MINUS_MINUS


def test_edge_type_strands():
    for a in [True, False]:
        for b in [True, False]:
            edge_type = contigraph.contig_graph.edge_type_from_strands(a, b)
            assert contigraph.contig_graph.from_strand(edge_type) == a
            assert contigraph.contig_graph.to_strand(edge_type) == b


def test_edge_type_str():
    assert str(EdgeType.PLUS_PLUS) == '++'
    assert str(EdgeType.PLUS_MINUS) == '+-'
    assert str(EdgeType.MINUS_PLUS) == '-+'
    assert str(EdgeType.MINUS_MINUS) == '--'


def test_edge_equality():
    assert Edge(True, 'A', False) == Edge(True, 'A', False)
    assert Edge(True, 'A', False) != Edge(True, 'A', True)
    assert Edge(True, 'A', False) != Edge(True, 'B', False)
    assert Edge(False, 'A', True).base_sign() is False
    assert Edge(False, 'A', True).neighbour_sign() is True


def test_add_edge_1():
    g = ContigGraph()
    assert g.add_edge('A', True, 'B', True)
    assert g.node_count() == 2
    assert g.edge_count() == 1
    assert g.get_node('A').out_edges == [Edge(True, 'B', True)]
    assert g.get_node('A').in_edges == []
    assert g.get_node('B').in_edges == [Edge(True, 'A', True)]
    assert g.get_node('B').out_edges == []


def test_add_edge_2():
    g = ContigGraph()
    assert g.add_edge('A', True, 'B', False)
    assert g.get_node('A').out_edges[0].edge_type == EdgeType.PLUS_MINUS
    assert g.get_node('B').in_edges[0].edge_type == EdgeType.MINUS_PLUS


def test_add_edge_duplicate():
    g = ContigGraph()
    assert g.add_edge('A', True, 'B', True)
    assert not g.add_edge('A', True, 'B', True)
    assert g.edge_count() == 1
    assert len(g.get_node('B').in_edges) == 1
    assert g.add_edge('A', True, 'B', False)  # different strand, so a different edge
    assert g.edge_count() == 2


def test_add_edge_self_loop():
    g = ContigGraph()
    assert g.add_edge('A', True, 'A', True)
    assert g.node_count() == 1
    assert g.get_node('A').out_edges == [Edge(True, 'A', True)]
    assert g.get_node('A').in_edges == [Edge(True, 'A', True)]


def test_has_node():
    g = build_chain()
    assert g.has_node('A')
    assert not g.has_node('D')
    assert g.get_node('D') is None


def test_successors_predecessors():
    g = build_chain()
    assert g.successors('B') == [Edge(True, 'C', True)]
    assert g.predecessors('B') == [Edge(True, 'A', True)]
    assert g.successors('C') == []
    assert g.successors('D') == []
    assert g.predecessors('D') == []


def test_iterate_links():
    g = build_chain()
    g.add_edge('C', False, 'A', True)
    assert sorted(g.iterate_links()) == [('A', True, 'B', True), ('B', True, 'C', True),
                                         ('C', False, 'A', True)]


def test_remove_node_missing():
    g = build_chain()
    assert not g.remove_node('D')
    assert g.node_count() == 3


def test_remove_node_contraction():
    g = build_chain()
    assert g.remove_node('B')
    assert not g.has_node('B')
    assert g.get_node('A').out_edges == [Edge(True, 'C', True)]
    assert g.get_node('C').in_edges == [Edge(True, 'A', True)]
    assert all(e.contig_id != 'B' for _, e in all_edges(g))


def test_remove_node_strand_flip():
    # A+ -> B- -> C+ becomes A+ -> C+
    g = ContigGraph()
    g.add_edge('A', True, 'B', False)
    g.add_edge('B', False, 'C', True)
    assert g.remove_node('B')
    assert g.get_node('A').out_edges == [Edge(True, 'C', True)]
    assert g.get_node('C').in_edges == [Edge(True, 'A', True)]


def test_remove_node_cross_product():
    g = ContigGraph()
    g.add_edge('A1', True, 'B', True)
    g.add_edge('A2', False, 'B', True)
    g.add_edge('B', True, 'C1', True)
    g.add_edge('B', True, 'C2', False)
    assert g.remove_node('B')
    assert sorted(g.iterate_links()) == [('A1', True, 'C1', True), ('A1', True, 'C2', False),
                                         ('A2', False, 'C1', True), ('A2', False, 'C2', False)]


def test_remove_node_dead_end():
    # B has a predecessor but no successor, so it is removed without adding any links.
    g = ContigGraph()
    g.add_edge('A', True, 'B', True)
    assert g.remove_node('B')
    assert g.node_count() == 1
    assert g.get_node('A').out_edges == []
    assert g.edge_count() == 0


def test_remove_node_start():
    g = build_chain()
    assert g.remove_node('A')
    assert list(g.iterate_links()) == [('B', True, 'C', True)]
    assert g.get_node('B').in_edges == []


def test_remove_node_self_loop():
    g = build_chain()
    g.add_edge('B', True, 'B', True)
    assert g.remove_node('B')
    assert list(g.iterate_links()) == [('A', True, 'C', True)]


def test_remove_node_existing_bypass():
    g = build_chain()
    g.add_edge('A', True, 'C', True)
    assert g.remove_node('B')
    assert list(g.iterate_links()) == [('A', True, 'C', True)]


def test_raw_degrees():
    g = ContigGraph()
    g.add_edge('A', True, 'B', True)
    g.add_edge('A', False, 'C', True)
    g.add_edge('D', True, 'A', False)
    a = g.get_node('A')
    assert a.out_degree_plus() == 1
    assert a.out_degree_minus() == 1
    assert a.in_degree_plus() == 0
    assert a.in_degree_minus() == 1


def test_real_degrees_1():
    g = build_chain()
    assert g.get_node('A').real_in_degree() == 0
    assert g.get_node('A').real_out_degree() == 1
    assert g.get_node('B').real_in_degree() == 1
    assert g.get_node('B').real_out_degree() == 1
    assert g.get_node('C').real_in_degree() == 1
    assert g.get_node('C').real_out_degree() == 0


def test_real_degrees_2():
    # A+ -> B+ and B- -> A- are the same link seen from both strands, so they count once.
    g = ContigGraph()
    g.add_edge('A', True, 'B', True)
    g.add_edge('B', False, 'A', False)
    a = g.get_node('A')
    assert a.out_degree_plus() == 1
    assert a.in_degree_minus() == 1
    assert a.real_out_degree() == 1
    assert a.real_in_degree() == 0
    b = g.get_node('B')
    assert b.real_in_degree() == 1
    assert b.real_out_degree() == 0


def test_real_degrees_3():
    # Leaving A's - strand is the same as entering A's + strand.
    g = ContigGraph()
    g.add_edge('A', False, 'B', True)
    g.add_edge('C', True, 'A', True)
    a = g.get_node('A')
    assert a.real_in_degree() == 2
    assert a.real_out_degree() == 0


def test_is_real_outgoing_incoming():
    plus, minus = Edge(True, 'B', True), Edge(False, 'B', True)
    assert contigraph.contig_graph.is_real_outgoing(plus, incoming=False)
    assert contigraph.contig_graph.is_real_outgoing(minus, incoming=True)
    assert not contigraph.contig_graph.is_real_outgoing(minus, incoming=False)
    assert not contigraph.contig_graph.is_real_outgoing(plus, incoming=True)
    assert contigraph.contig_graph.is_real_incoming(plus, incoming=True)
    assert contigraph.contig_graph.is_real_incoming(minus, incoming=False)
    assert not contigraph.contig_graph.is_real_incoming(plus, incoming=False)
    assert not contigraph.contig_graph.is_real_incoming(minus, incoming=True)


def test_only_real_in_out():
    g = build_chain()
    assert g.get_node('A').only_real_in() is None
    assert g.get_node('A').only_real_out() == Edge(True, 'B', True)
    assert g.get_node('C').only_real_in() == Edge(True, 'B', True)
    assert g.get_node('C').only_real_out() is None


def test_only_real_out_via_minus_strand():
    g = ContigGraph()
    g.add_edge('B', False, 'A', False)
    assert g.get_node('A').only_real_out() == Edge(False, 'B', False)
