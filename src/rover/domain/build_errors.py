"""Composition build errors reported by the registry or a local composition."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Literal

BuildErrorType = Literal["composition"]


@dataclass(slots=True, frozen=True)
class BuildError:
    """A single build error produced while composing a supergraph."""

    message: str | None
    code: str | None = None
    type: BuildErrorType = "composition"

    @classmethod
    def composition_error(cls, code: str | None, message: str | None) -> BuildError:
        return cls(message=message, code=code, type="composition")

    def to_dict(self) -> dict[str, Any]:
        """Serialize the build error to a JSON-ready dictionary."""
        return {"message": self.message, "code": self.code, "type": self.type}

    def __str__(self) -> str:
        message = self.message or "An unknown error occurred during composition"
        if self.code:
            return f"{message} [{self.code}]"
        return message


@dataclass(slots=True, frozen=True)
class BuildErrors:
    """Ordered collection of build errors."""

    errors: tuple[BuildError, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, errors: Iterable[BuildError]) -> BuildErrors:
        return cls(errors=tuple(errors))

    def __iter__(self) -> Iterator[BuildError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __bool__(self) -> bool:
        return bool(self.errors)

    def is_empty(self) -> bool:
        return not self.errors

    def to_list(self) -> list[dict[str, Any]]:
        return [error.to_dict() for error in self.errors]

    def __str__(self) -> str:
        return "\n".join(str(error) for error in self.errors)


def pluralize_build_errors(count: int) -> str:
    """Return ``"1 build error"`` or ``"N build errors"``."""
    return f"{count} build error" if count == 1 else f"{count} build errors"
