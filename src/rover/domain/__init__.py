"""Domain types and contracts for command outcomes."""

from .build_errors import BuildError, BuildErrors
from .codes import ERROR_METADATA, ErrorKind, ErrorMetadata, Severity
from .errors import (
    AuthenticationFailed,
    BuildErrorsFailure,
    GraphNotFound,
    InvalidGraphRef,
    MalformedResponse,
    NoSupergraphBuilds,
    OperationCheckFailure,
    ProfileNotFound,
    RoverError,
    SubgraphNotFound,
    TemplateNotFound,
    TransportError,
    UnclassifiedError,
    UnknownErrorCode,
)
from .models import GraphRef
from .results import OUTPUT_VARIANTS, RoverOutput

__all__ = [
    "BuildError",
    "BuildErrors",
    "ERROR_METADATA",
    "ErrorKind",
    "ErrorMetadata",
    "Severity",
    "RoverError",
    "InvalidGraphRef",
    "TransportError",
    "MalformedResponse",
    "GraphNotFound",
    "SubgraphNotFound",
    "ProfileNotFound",
    "AuthenticationFailed",
    "TemplateNotFound",
    "NoSupergraphBuilds",
    "BuildErrorsFailure",
    "OperationCheckFailure",
    "UnknownErrorCode",
    "UnclassifiedError",
    "GraphRef",
    "OUTPUT_VARIANTS",
    "RoverOutput",
]
