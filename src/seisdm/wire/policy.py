"""Decode-time policies: nesting limit and oneof conflict resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import replace

from seisdm.core import settings
from seisdm.exceptions import InvalidUnionError
from seisdm.exceptions import MalformedInputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodePolicy:
    """Options threaded through one decode call.

    Args:
        strict: Reject oneof groups with more than one variant on the wire.
        max_depth: Maximum nesting depth of messages.
        depth: Current nesting depth.
    """

    strict: bool = True
    max_depth: int = 100
    depth: int = 0

    @classmethod
    def from_settings(cls, strict: bool | None = None) -> DecodePolicy:
        """Build a policy from environment settings, with an optional strictness override."""
        current = settings.get_settings()
        if strict is None:
            strict = current.union_policy == "strict"
        return cls(strict=strict, max_depth=current.max_depth)

    def nested(self, type_name: str) -> DecodePolicy:
        """Return the policy for one level deeper, failing past the depth limit."""
        depth = self.depth + 1
        if depth > self.max_depth:
            msg = f"Message nesting exceeds the limit of {self.max_depth}"
            raise MalformedInputError(msg, type_name=type_name)
        return replace(self, depth=depth)


def resolve_oneof(type_name: str, group: str, seen: list[str], policy: DecodePolicy) -> str:
    """Pick the variant of a oneof group given the variant names seen on the wire.

    Args:
        type_name: Message type holding the oneof, for error messages.
        group: Name of the oneof group.
        seen: Variant names in wire order, repeats included.
        policy: Current decode policy.

    Returns:
        Name of the variant to keep.

    Raises:
        InvalidUnionError: No variant was set, or several were set in strict mode.
    """
    populated = list(dict.fromkeys(seen))
    if not populated:
        raise InvalidUnionError(type_name, group, populated)

    if len(populated) > 1:
        if policy.strict:
            raise InvalidUnionError(type_name, group, populated)
        logger.warning(
            "Oneof '%s' of %s has variants %s set, keeping last one '%s'", group, type_name, populated, seen[-1]
        )

    return seen[-1]
