"""Resource classification and checker dispatch.

A resource identifier is classified by its scheme prefix only; no network
access happens here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .checkers import HttpChecker, PostgresChecker, ResourceChecker
from .config import PollConfig
from .errors import AwfiError

logger = logging.getLogger(__name__)

HTTP_PREFIXES = ("http://", "https://")
POSTGRES_PREFIXES = ("postgres://", "postgresql://")


class ResourceKind(str, Enum):
    HTTP = "http"
    POSTGRES = "postgres"
    UNSUPPORTED = "unsupported"


class UnsupportedResourceError(AwfiError, ValueError):
    """Raised when asked to build a checker for an unrecognised scheme."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Unsupported resource type: {identifier}")


def classify(identifier: str) -> ResourceKind:
    """Map an identifier to its resource kind (case-sensitive prefix match)."""
    if identifier.startswith(HTTP_PREFIXES):
        return ResourceKind.HTTP
    if identifier.startswith(POSTGRES_PREFIXES):
        return ResourceKind.POSTGRES
    return ResourceKind.UNSUPPORTED


@dataclass(frozen=True)
class ResourceTarget:
    """A resource identifier together with its classification."""

    identifier: str
    kind: ResourceKind

    @classmethod
    def parse(cls, identifier: str) -> ResourceTarget:
        return cls(identifier=identifier, kind=classify(identifier))

    @property
    def supported(self) -> bool:
        return self.kind is not ResourceKind.UNSUPPORTED


# Dispatcher
CHECKER_FACTORIES: dict[ResourceKind, Callable[[str, PollConfig], ResourceChecker]] = {
    ResourceKind.HTTP: lambda ident, cfg: HttpChecker(ident, timeout=cfg.timeout),
    ResourceKind.POSTGRES: lambda ident, cfg: PostgresChecker(ident, timeout=cfg.timeout),
}


def build_checker(target: ResourceTarget, config: PollConfig) -> ResourceChecker:
    """Construct the checker for a classified target.

    Raises UnsupportedResourceError for targets no checker handles.
    """
    factory = CHECKER_FACTORIES.get(target.kind)
    if factory is None:
        raise UnsupportedResourceError(target.identifier)
    logger.debug("Using %s checker (timeout=%ss)", target.kind.value, config.timeout)
    return factory(target.identifier, config)
