"""
Schema descriptors for the manifest format catalog.

A descriptor couples a structural matcher with optional converters to and
from the canonical (W3C) format. Matching is allow-list based:

- every required dotted path must exist, otherwise the schema is
  disqualified before any member is inspected
- every property name, compared case-insensitively, must appear in the
  allow-list for its level, or be an extension member when the schema
  allows extensions
- nested objects are checked against their nested allow-list, and lists are
  checked element by element

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

# name -> None (leaf) or nested allow-list
MemberTree = Mapping[str, Optional["MemberTree"]]
Converter = Callable[[Dict[str, Any]], Dict[str, Any]]

# Leading underscore (_foo) or a vendor prefix segment (mjs_extended_scope)
_EXTENSION_MEMBER = re.compile(r"^(_|[^_]+_)")


def is_extension_member(name: str) -> bool:
    """Return True if ``name`` follows the application-defined extension convention."""
    return bool(_EXTENSION_MEMBER.match(name))


def has_path(content: Mapping[str, Any], dotted_path: str) -> bool:
    """Return True if every segment of ``dotted_path`` exists in ``content``."""
    # Exact-case lookup; only the allow-list pass folds case
    node: Any = content
    for segment in dotted_path.split("."):
        if not isinstance(node, Mapping) or segment not in node:
            return False
        node = node[segment]
    return True


def members_match(
    value: Any, allowed: MemberTree, allow_extensions: bool = False
) -> bool:
    """
    Check ``value`` against an allow-list tree.

    Args:
        value: Object (or list of objects) to check
        allowed: Allow-list for this level
        allow_extensions: Accept extension members not in the allow-list

    Returns:
        True if every property is known at every level
    """
    if isinstance(value, list):
        return all(members_match(item, allowed, allow_extensions) for item in value)

    if not isinstance(value, Mapping):
        # Scalars carry no members to check
        return True

    for name, member_value in value.items():
        key = str(name).lower()
        if key not in allowed:
            if allow_extensions and is_extension_member(key):
                continue
            return False

        nested = allowed[key]
        if nested is not None and not members_match(
            member_value, nested, allow_extensions
        ):
            return False

    return True


@dataclass(frozen=True)
class SchemaDescriptor:
    """
    One registered manifest format.

    Attributes:
        id: Format identifier (e.g. "w3c", "chromeos")
        members: Allow-list tree of known properties
        required: Dotted paths that must exist for the schema to match
        allow_extensions: Accept extension members at every level
        to_canonical: Converter to the canonical format (identity for canonical)
        from_canonical: Converter from the canonical format (identity for canonical)
    """

    id: str
    members: MemberTree
    required: Tuple[str, ...] = ()
    allow_extensions: bool = False
    to_canonical: Optional[Converter] = None
    from_canonical: Optional[Converter] = None

    def matches(self, content: Any) -> bool:
        """Return True if ``content`` structurally conforms to this schema."""
        if not isinstance(content, Mapping):
            return False

        for path in self.required:
            if not has_path(content, path):
                return False

        return members_match(content, self.members, self.allow_extensions)
