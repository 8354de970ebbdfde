"""
Default inbound policy modes.

A pod (or the cluster as a whole) declares how inbound connections are
treated when no explicit ``Server`` authorization applies. The set of
modes is closed; textual forms match the values accepted by the
``config.linkerd.io/default-inbound-policy`` annotation.
"""

from __future__ import annotations

from enum import Enum


class InvalidDefaultPolicyError(ValueError):
    """Raised when a default policy value is not a known mode."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"invalid default policy: {value!r}")


class DefaultPolicy(Enum):
    """Default inbound policy mode."""

    ALL_UNAUTHENTICATED = "all-unauthenticated"
    ALL_AUTHENTICATED = "all-authenticated"
    CLUSTER_UNAUTHENTICATED = "cluster-unauthenticated"
    CLUSTER_AUTHENTICATED = "cluster-authenticated"
    DENY = "deny"
    AUDIT = "audit"

    @classmethod
    def parse(cls, value: str) -> DefaultPolicy:
        """
        Parse a default policy from its textual form.

        Matching is exact: no case folding or whitespace trimming.

        Raises:
            InvalidDefaultPolicyError: If the value is not a known mode
        """
        for mode in cls:
            if mode.value == value:
                return mode
        raise InvalidDefaultPolicyError(value)

    @property
    def is_allow(self) -> bool:
        """True for the modes that admit some traffic by default."""
        return self in (
            DefaultPolicy.ALL_UNAUTHENTICATED,
            DefaultPolicy.ALL_AUTHENTICATED,
            DefaultPolicy.CLUSTER_UNAUTHENTICATED,
            DefaultPolicy.CLUSTER_AUTHENTICATED,
        )

    @property
    def authenticated_only(self) -> bool:
        """True if clients must present a mesh identity."""
        return self in (
            DefaultPolicy.ALL_AUTHENTICATED,
            DefaultPolicy.CLUSTER_AUTHENTICATED,
        )

    @property
    def cluster_only(self) -> bool:
        """True if clients must originate from cluster networks."""
        return self in (
            DefaultPolicy.CLUSTER_UNAUTHENTICATED,
            DefaultPolicy.CLUSTER_AUTHENTICATED,
        )

    def __str__(self) -> str:
        return self.value
