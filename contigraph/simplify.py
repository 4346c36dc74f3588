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

from .gfa import AssemblyGfa


def simplify(args):
    print(f'\nLoading {args.in_gfa}...', flush=True, end='')
    gfa = AssemblyGfa(args.in_gfa)
    graph = gfa.build_graph()
    print(f' {graph.node_count()} nodes, {graph.edge_count()} edges')

    if args.remove:
        print('\nRemoving nodes:')
        for contig_id in args.remove:
            if graph.remove_node(contig_id):
                print(f'  {contig_id}: removed')
            else:
                print(f'  {contig_id}: not found')
        print(f'  {graph.node_count()} nodes, {graph.edge_count()} edges remain')

    print_degree_summary(graph)
    gfa.save(args.out_gfa, graph=graph)
    print(f'\nSaved graph to {args.out_gfa}')


def degree_summary(graph):
    """
    Returns a counter of (real in-degree, real out-degree) -> node count.
    """
    counts = collections.Counter()
    for node in graph.nodes.values():
        counts[(node.real_in_degree(), node.real_out_degree())] += 1
    return counts


def print_degree_summary(graph):
    print('\nNode degrees (in, out: count):')
    for (in_deg, out_deg), count in sorted(degree_summary(graph).items()):
        print(f'  {in_deg}, {out_deg}: {count}')
