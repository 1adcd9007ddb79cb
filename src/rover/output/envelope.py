"""Typed JSON envelope shared by every command in JSON output mode."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

JSON_VERSION = "1"


@dataclass(slots=True, frozen=True)
class JsonError:
    """Machine-readable error entry of the envelope."""

    message: str
    code: str | None
    details: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error entry to a JSON-ready dictionary."""
        payload: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details is not None:
            payload["details"] = self.details
        return payload


@dataclass(slots=True, frozen=True)
class JsonData:
    """The ``data`` object: the success flag plus variant fields."""

    success: bool
    fields: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        payload = dict(self.fields)
        payload["success"] = self.success
        return payload


@dataclass(slots=True, frozen=True)
class JsonOutput:
    """Versioned command envelope for JSON output."""

    data: JsonData
    error: JsonError | None = None
    json_version: str = JSON_VERSION

    def to_dict(self) -> dict[str, Any]:
        """Serialize the envelope to a JSON-ready dictionary."""
        return {
            "json_version": self.json_version,
            "data": self.data.to_dict(),
            "error": self.error.to_dict() if self.error is not None else None,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, default=str)


def build_success_envelope(
    *,
    fields: dict[str, Any],
    error: JsonError | None = None,
) -> JsonOutput:
    """Build a success envelope; ``error`` is set only for dual-state outcomes."""
    return JsonOutput(data=JsonData(success=True, fields=fields), error=error)


def build_error_envelope(
    *,
    error: JsonError,
    fields: dict[str, Any] | None = None,
) -> JsonOutput:
    """Build an error envelope."""
    return JsonOutput(data=JsonData(success=False, fields=fields or {}), error=error)
