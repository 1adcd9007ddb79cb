"""Unified domain error taxonomy for command outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from .build_errors import BuildErrors, pluralize_build_errors
from .codes import ERROR_METADATA, ErrorKind, Severity

if TYPE_CHECKING:
    from .models import CheckResponse, GraphRef


@dataclass(slots=True, eq=False)
class RoverError(Exception):
    """Base class for classified command failures."""

    kind: ClassVar[ErrorKind] = ErrorKind.UNCLASSIFIED

    @property
    def message(self) -> str:
        return "Rover failed for an unknown reason."

    @property
    def code(self) -> str | None:
        return ERROR_METADATA[self.kind].code

    @property
    def item_severity(self) -> Severity:
        return ERROR_METADATA[self.kind].item_severity

    def details(self) -> dict[str, Any] | None:
        """Structured auxiliary data for the envelope, or None when the kind has none."""
        return None

    def data(self) -> dict[str, Any]:
        """Extra fields merged into the envelope ``data`` object."""
        return {}

    def items(self) -> list[str]:
        """Itemized follow-on lines printed after the message."""
        return []

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True, eq=False)
class InvalidGraphRef(RoverError):
    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_GRAPH_REF

    value: str

    @property
    def message(self) -> str:
        return (
            f'"{self.value}" is not a valid graph reference. Graph references must be in the '
            "format <NAME> or <NAME>@<VARIANT>, where <NAME> starts with a letter and "
            "contains only letters, numbers, `-` or `_`."
        )


@dataclass(slots=True, eq=False)
class TransportError(RoverError):
    """The registry could not be reached."""

    kind: ClassVar[ErrorKind] = ErrorKind.TRANSPORT

    operation: str
    reason: str
    graph_ref: GraphRef | None = None

    @property
    def message(self) -> str:
        if self.graph_ref is not None:
            return (
                f'Could not reach the registry while {self.operation} for "{self.graph_ref}": '
                f"{self.reason}"
            )
        return f"Could not reach the registry while {self.operation}: {self.reason}"


@dataclass(slots=True, eq=False)
class MalformedResponse(RoverError):
    kind: ClassVar[ErrorKind] = ErrorKind.MALFORMED_RESPONSE

    reason: str

    @property
    def message(self) -> str:
        return f"The registry returned an invalid response: {self.reason}"


@dataclass(slots=True, eq=False)
class GraphNotFound(RoverError):
    kind: ClassVar[ErrorKind] = ErrorKind.GRAPH_NOT_FOUND

    graph_ref: GraphRef

    @property
    def message(self) -> str:
        return f'Could not find graph "{self.graph_ref}".'


@dataclass(slots=True, eq=False)
class SubgraphNotFound(RoverError):
    kind: ClassVar[ErrorKind] = ErrorKind.SUBGRAPH_NOT_FOUND

    invalid_subgraph: str
    valid_subgraphs: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f'Could not find subgraph "{self.invalid_subgraph}".'

    def items(self) -> list[str]:
        if not self.valid_subgraphs:
            return []
        return [f"Valid subgraphs are: {', '.join(self.valid_subgraphs)}"]


@dataclass(slots=True, eq=False)
class ProfileNotFound(RoverError):
    kind: ClassVar[ErrorKind] = ErrorKind.PROFILE_NOT_FOUND

    profile_name: str

    @property
    def message(self) -> str:
        return f'Could not find a profile named "{self.profile_name}".'


@dataclass(slots=True, eq=False)
class AuthenticationFailed(RoverError):
    kind: ClassVar[ErrorKind] = ErrorKind.AUTHENTICATION_FAILED

    profile_name: str
    reason: str = "no API key was found"

    @property
    def message(self) -> str:
        return f'Could not authenticate with the "{self.profile_name}" profile: {self.reason}.'


@dataclass(slots=True, eq=False)
class TemplateNotFound(RoverError):
    kind: ClassVar[ErrorKind] = ErrorKind.TEMPLATE_NOT_FOUND

    template_id: str

    @property
    def message(self) -> str:
        return f'No template exists with the id "{self.template_id}".'


@dataclass(slots=True, eq=False)
class NoSupergraphBuilds(RoverError):
    """A supergraph was requested but no publish ever composed."""

    kind: ClassVar[ErrorKind] = ErrorKind.NO_SUPERGRAPH_BUILDS

    graph_ref: GraphRef
    source: BuildErrors

    @property
    def message(self) -> str:
        return (
            f'No supergraph SDL exists for "{self.graph_ref}" because its subgraphs '
            "failed to build."
        )

    def details(self) -> dict[str, Any]:
        return {"build_errors": self.source.to_list()}

    def items(self) -> list[str]:
        return [str(error) for error in self.source]


@dataclass(slots=True, eq=False)
class BuildErrorsFailure(RoverError):
    """
    Composition produced build errors.

    With ``subgraph`` and ``graph_ref`` set, the errors came from building one
    subgraph into a registry supergraph; otherwise from a local composition.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.BUILD_ERRORS

    source: BuildErrors
    subgraph: str | None = None
    graph_ref: GraphRef | None = None

    @property
    def message(self) -> str:
        count = pluralize_build_errors(len(self.source))
        if self.subgraph is not None and self.graph_ref is not None:
            return (
                f"Encountered {count} while trying to build subgraph "
                f'"{self.subgraph}" into supergraph "{self.graph_ref}".'
            )
        return f"Encountered {count} while trying to build a supergraph."

    def details(self) -> dict[str, Any]:
        return {"build_errors": self.source.to_list()}

    def items(self) -> list[str]:
        return [str(error) for error in self.source]


@dataclass(slots=True, eq=False)
class OperationCheckFailure(RoverError):
    """An operation check found changes that break client traffic."""

    kind: ClassVar[ErrorKind] = ErrorKind.OPERATION_CHECK_FAILURE

    graph_ref: GraphRef
    check_response: CheckResponse

    @property
    def message(self) -> str:
        count = self.check_response.failure_count
        noun = "schema change" if count == 1 else "schema changes"
        return (
            f"This operation check has encountered {count} {noun} that would break "
            "operations from existing client traffic."
        )

    def data(self) -> dict[str, Any]:
        payload = self.check_response.get_json()
        payload["success"] = False
        return payload

    def items(self) -> list[str]:
        return [
            f"{change.code}: {change.description}"
            for change in self.check_response.changes
            if change.severity == "FAIL"
        ]


@dataclass(slots=True, eq=False)
class UnknownErrorCode(RoverError):
    kind: ClassVar[ErrorKind] = ErrorKind.UNKNOWN_ERROR_CODE

    requested_code: str

    @property
    def message(self) -> str:
        return f'There is no error with the code "{self.requested_code}".'


@dataclass(slots=True, eq=False)
class UnclassifiedError(RoverError):
    """Any failure that did not match a known kind."""

    kind: ClassVar[ErrorKind] = ErrorKind.UNCLASSIFIED

    text: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> UnclassifiedError:
        return cls(text=str(exc) or type(exc).__name__)

    @property
    def message(self) -> str:
        return self.text


ERROR_TYPES: tuple[type[RoverError], ...] = (
    InvalidGraphRef,
    TransportError,
    MalformedResponse,
    GraphNotFound,
    SubgraphNotFound,
    ProfileNotFound,
    AuthenticationFailed,
    TemplateNotFound,
    NoSupergraphBuilds,
    BuildErrorsFailure,
    OperationCheckFailure,
    UnknownErrorCode,
    UnclassifiedError,
)
