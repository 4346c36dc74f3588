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

import enum

from .misc import strand_char


class EdgeType(enum.IntEnum):
    PLUS_PLUS = 0
    PLUS_MINUS = 1
    MINUS_PLUS = 2
    MINUS_MINUS = 3

    def __str__(self):
        return strand_char(from_strand(self)) + strand_char(to_strand(self))


def edge_type_from_strands(from_strand, to_strand):
    if from_strand and to_strand:
        return EdgeType.PLUS_PLUS
    elif from_strand and not to_strand:
        return EdgeType.PLUS_MINUS
    elif not from_strand and to_strand:
        return EdgeType.MINUS_PLUS
    else:
        return EdgeType.MINUS_MINUS


def from_strand(edge_type):
    return edge_type == EdgeType.PLUS_PLUS or edge_type == EdgeType.PLUS_MINUS


def to_strand(edge_type):
    return edge_type == EdgeType.PLUS_PLUS or edge_type == EdgeType.MINUS_PLUS


class Edge(object):
    """
    An Edge is stored on one node (the base node) and points to a neighbouring contig. Its type
    holds two strands: the base node's strand first, the neighbour's strand second. So the same
    link appears as (++, B) in A's outgoing list and as (++, A) in B's incoming list, while a
    link A+ -> B- appears as (+-, B) in A's outgoing list and as (-+, A) in B's incoming list.
    """
    def __init__(self, base_sign, contig_id, neighbour_sign):
        self.edge_type = edge_type_from_strands(base_sign, neighbour_sign)
        self.contig_id = contig_id

    def __repr__(self):
        return f'{self.edge_type}{self.contig_id}'

    def __eq__(self, other):
        return self.edge_type == other.edge_type and self.contig_id == other.contig_id

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((self.edge_type, self.contig_id))

    def base_sign(self):
        return from_strand(self.edge_type)

    def neighbour_sign(self):
        return to_strand(self.edge_type)


def is_real_outgoing(edge, incoming):
    """
    In a bidirected graph, leaving a node's + strand is the same as entering its - strand from the
    other direction. So an edge counts as a 'real' outgoing edge if it is an outgoing edge from the
    + strand or an incoming edge to the - strand.
    """
    if incoming:
        return not edge.base_sign()
    return edge.base_sign()


def is_real_incoming(edge, incoming):
    """
    The counterpart to is_real_outgoing: an incoming edge to the + strand or an outgoing edge from
    the - strand.
    """
    if incoming:
        return edge.base_sign()
    return not edge.base_sign()


def real_neighbour_name(edge):
    """
    Returns the neighbour's ID and strand as seen from the base node's + strand. Edges on the base
    node's - strand have the neighbour's strand flipped.
    """
    if edge.base_sign():
        return edge.contig_id + strand_char(edge.neighbour_sign())
    return edge.contig_id + strand_char(not edge.neighbour_sign())


class Node(object):
    def __init__(self, contig_id):
        self.contig_id = contig_id
        self.out_edges = []
        self.in_edges = []

    def __repr__(self):
        return f'node {self.contig_id}: in {self.in_edges}, out {self.out_edges}'

    def in_degree_plus(self):
        return sum(1 for e in self.in_edges if e.base_sign())

    def out_degree_plus(self):
        return sum(1 for e in self.out_edges if e.base_sign())

    def in_degree_minus(self):
        return sum(1 for e in self.in_edges if not e.base_sign())

    def out_degree_minus(self):
        return sum(1 for e in self.out_edges if not e.base_sign())

    def real_out_degree(self):
        """
        Returns the number of distinct neighbour+strand combinations that follow this node, after
        collapsing the two strands into a single-stranded view.
        """
        neighbours = set()
        for e in self.in_edges:
            if is_real_outgoing(e, incoming=True):
                neighbours.add(real_neighbour_name(e))
        for e in self.out_edges:
            if is_real_outgoing(e, incoming=False):
                neighbours.add(real_neighbour_name(e))
        return len(neighbours)

    def real_in_degree(self):
        neighbours = set()
        for e in self.in_edges:
            if is_real_incoming(e, incoming=True):
                neighbours.add(real_neighbour_name(e))
        for e in self.out_edges:
            if is_real_incoming(e, incoming=False):
                neighbours.add(real_neighbour_name(e))
        return len(neighbours)

    def only_real_in(self):
        """
        Returns the node's real incoming edge, meant for nodes with a real in-degree of one. Returns
        None if there isn't one.
        """
        for e in self.in_edges:
            if is_real_incoming(e, incoming=True):
                return e
        for e in self.out_edges:
            if is_real_incoming(e, incoming=False):
                return e
        return None

    def only_real_out(self):
        for e in self.out_edges:
            if is_real_outgoing(e, incoming=False):
                return e
        for e in self.in_edges:
            if is_real_outgoing(e, incoming=True):
                return e
        return None

    def check_existence(self, base_sign, to_id, to_sign):
        return Edge(base_sign, to_id, to_sign) in self.out_edges

    def insert_edge_to(self, to_id, base_sign, to_sign):
        edge = Edge(base_sign, to_id, to_sign)
        if edge not in self.out_edges:
            self.out_edges.append(edge)

    def insert_edge_from(self, from_id, base_sign, from_sign):
        edge = Edge(base_sign, from_id, from_sign)
        if edge not in self.in_edges:
            self.in_edges.append(edge)

    def remove_edges_to(self, contig_id):
        self.out_edges = [e for e in self.out_edges if e.contig_id != contig_id]

    def remove_edges_from(self, contig_id):
        self.in_edges = [e for e in self.in_edges if e.contig_id != contig_id]


class ContigGraph(object):
    """
    This class stores a bidirected graph of contigs. Each link is stored twice: as an outgoing edge
    on the first node and as an incoming edge on the second node, so successors and predecessors
    can be found equally quickly.
    """
    def __init__(self):
        self.nodes = {}

    def __repr__(self):
        return f'contig graph: {self.node_count()} nodes, {self.edge_count()} edges'

    def has_node(self, contig_id):
        return contig_id in self.nodes

    def get_node(self, contig_id):
        return self.nodes.get(contig_id)

    def node_count(self):
        return len(self.nodes)

    def edge_count(self):
        return sum(len(n.out_edges) for n in self.nodes.values())

    def add_node(self, contig_id):
        if contig_id not in self.nodes:
            self.nodes[contig_id] = Node(contig_id)
        return self.nodes[contig_id]

    def add_edge(self, from_id, from_sign, to_id, to_sign):
        """
        Adds a link from_id(from_sign) -> to_id(to_sign), creating either node if needed. Returns
        True if the link was added, False if it was already present.
        """
        from_node = self.add_node(from_id)
        to_node = self.add_node(to_id)
        if from_node.check_existence(from_sign, to_id, to_sign):
            return False
        from_node.insert_edge_to(to_id, from_sign, to_sign)
        to_node.insert_edge_from(from_id, to_sign, from_sign)
        return True

    def remove_node(self, contig_id):
        """
        Removes a node from the graph, first adding a bypass link from each predecessor to each
        successor so any walk through the node is kept. If the node has only predecessors or only
        successors, it is removed without adding any links. Returns True if the node was removed,
        False if it wasn't in the graph.
        """
        if contig_id not in self.nodes:
            return False
        node = self.nodes[contig_id]
        predecessors, successors = list(node.in_edges), list(node.out_edges)

        for p in predecessors:
            if p.contig_id == contig_id:
                continue
            for s in successors:
                if s.contig_id == contig_id:
                    continue
                self.add_edge(p.contig_id, p.neighbour_sign(), s.contig_id, s.neighbour_sign())

        for p in predecessors:
            if p.contig_id != contig_id:
                self.nodes[p.contig_id].remove_edges_to(contig_id)
        for s in successors:
            if s.contig_id != contig_id:
                self.nodes[s.contig_id].remove_edges_from(contig_id)
        del self.nodes[contig_id]
        return True

    def successors(self, contig_id):
        node = self.nodes.get(contig_id)
        return [] if node is None else list(node.out_edges)

    def predecessors(self, contig_id):
        node = self.nodes.get(contig_id)
        return [] if node is None else list(node.in_edges)

    def iterate_links(self):
        """
        Yields each link once as a (from_id, from_sign, to_id, to_sign) tuple.
        """
        for contig_id, node in self.nodes.items():
            for e in node.out_edges:
                yield contig_id, e.base_sign(), e.contig_id, e.neighbour_sign()

    def add_links(self, links):
        added = 0
        for from_id, from_sign, to_id, to_sign in links:
            if self.add_edge(from_id, from_sign, to_id, to_sign):
                added += 1
        return added
