"""
cloud_inventory/auth/chain.py - Credential fallback chain

Each provider describes where its credentials can come from as an ordered
list of CredentialResolver entries:

    STATIC   explicit keys in the driver's ``credentials`` mapping
    PROFILE  a named profile / config file reference
    AMBIENT  environment, process or instance-level discovery

The first resolver that returns a value wins; sources are never merged.
When every resolver comes back empty, AuthenticationError names each input
that was checked.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from ..exceptions import AuthenticationError, InventoryError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CredentialSource(Enum):
    """Where a set of credentials came from"""

    STATIC = "static"
    PROFILE = "profile"
    AMBIENT = "ambient"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CredentialResolver(Generic[T]):
    """One link of the chain

    Attributes:
        source: CredentialSource this resolver represents
        inputs: names of the inputs it reads, used in error messages
        resolve: credentials mapping -> provider credentials, or None when
            the inputs are absent or incomplete
    """

    source: CredentialSource
    inputs: tuple[str, ...]
    resolve: Callable[[Mapping[str, Any]], T | None]


@dataclass(frozen=True)
class ResolvedCredentials(Generic[T]):
    """Winning resolver output

    Attributes:
        source: CredentialSource that produced the value
        value: provider-native credentials (boto3 Session, oci config dict, ...)
        description: short label for logs, never contains secrets
    """

    source: CredentialSource
    value: T
    description: str


class CredentialChain(Generic[T]):
    """Ordered credential fallback

    Example:
        chain = CredentialChain("aws", [static, profile, ambient])
        resolved = chain.resolve({"profile": "prod"})
        session = resolved.value
    """

    def __init__(self, provider: str, resolvers: Sequence[CredentialResolver[T]]):
        self.provider = provider
        self.resolvers = list(resolvers)

    @property
    def checked_inputs(self) -> list[str]:
        return [name for resolver in self.resolvers for name in resolver.inputs]

    def resolve(self, credentials: Mapping[str, Any] | None) -> ResolvedCredentials[T]:
        """Walk the chain and return the first complete credentials

        Raises:
            AuthenticationError: no resolver produced credentials
        """
        credentials = credentials or {}
        last_error: Exception | None = None

        for resolver in self.resolvers:
            try:
                value = resolver.resolve(credentials)
            except InventoryError:
                raise
            except Exception as e:
                logger.debug(f"[{self.provider}] {resolver.source} credentials unusable: {e}")
                last_error = e
                continue

            if value is None:
                logger.debug(f"[{self.provider}] no {resolver.source} credentials")
                continue

            logger.debug(f"[{self.provider}] using {resolver.source} credentials")
            return ResolvedCredentials(
                source=resolver.source,
                value=value,
                description=f"{self.provider}:{resolver.source}",
            )

        raise AuthenticationError(self.provider, checked=self.checked_inputs, cause=last_error)
