"""
Rover Commands

Each handler takes its collaborators explicitly and returns one RoverOutput
variant or raises a RoverError. The CLI layer (cli.py) only routes arguments
and hands the handler to the dispatcher.
"""

from .contract import describe_contract, publish_contract
from .docs import list_docs, open_docs
from .explain import explain
from .graph import check_graph, fetch_graph, publish_graph
from .introspect import introspect
from .profile import list_profiles, save_profile
from .readme import fetch_readme, publish_readme
from .subgraph import delete_subgraph, fetch_subgraph, list_subgraphs, publish_subgraph
from .supergraph import compose_supergraph, fetch_supergraph, read_subgraph_schemas
from .template import list_template_catalog, use_template

__all__ = [
    "describe_contract",
    "publish_contract",
    "list_docs",
    "open_docs",
    "explain",
    "fetch_graph",
    "publish_graph",
    "check_graph",
    "introspect",
    "list_profiles",
    "save_profile",
    "fetch_readme",
    "publish_readme",
    "list_subgraphs",
    "fetch_subgraph",
    "publish_subgraph",
    "delete_subgraph",
    "fetch_supergraph",
    "read_subgraph_schemas",
    "compose_supergraph",
    "list_template_catalog",
    "use_template",
]
