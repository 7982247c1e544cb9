from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ConversionError(Exception):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = field(default=None)

    def __str__(self) -> str:
        return self.message


class MalformedObjectError(ConversionError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("MalformedObject", message, details)


class EncodingError(ConversionError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("EncodingFailed", message, details)


class NotFoundError(ConversionError):
    """A namespace, secret or secret key the caller depends on is absent.

    Distinct from the other errors so reconcilers can requeue, since the
    object may simply not exist yet.
    """

    def __init__(self, kind: str, name: str, namespace: str | None = None, message: str | None = None):
        where = f"{namespace}/{name}" if namespace else name
        super().__init__(
            "NotFound",
            message or f"{kind} {where} not found",
            {"kind": kind, "namespace": namespace, "name": name},
        )
        self.kind = kind
        self.name = name
        self.namespace = namespace


class NamespaceConflictError(ConversionError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("NamespaceConflict", message, details)


class ConfigError(ConversionError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("InvalidConfig", message, details)
