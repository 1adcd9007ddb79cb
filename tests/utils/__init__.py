from .builders import (
    SDL,
    STUDIO_ROOT_URL,
    make_build_errors,
    make_changes,
    make_check_response,
    make_graph_ref,
    make_subgraph_delete,
    make_subgraph_list,
    make_subgraph_publish,
    make_template,
    sample_errors,
    sample_outputs,
)
from .fakes import (
    FakeComposer,
    FakeIntrospector,
    FakeStudioClient,
    FakeTemplateFetcher,
    client_factory_for,
)

__all__ = [
    "SDL",
    "STUDIO_ROOT_URL",
    "make_build_errors",
    "make_changes",
    "make_check_response",
    "make_graph_ref",
    "make_subgraph_delete",
    "make_subgraph_list",
    "make_subgraph_publish",
    "make_template",
    "sample_errors",
    "sample_outputs",
    "FakeComposer",
    "FakeIntrospector",
    "FakeStudioClient",
    "FakeTemplateFetcher",
    "client_factory_for",
]
