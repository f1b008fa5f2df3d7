"""GitHub discussion store adapters."""

from weekly_digest.adapters.github.graphql_client import GitHubGraphQLClient, GraphQLError
from weekly_digest.adapters.github.label_manager import (
    ACCESSIBLE_LABEL_COLORS,
    attach_labels,
    ensure_labels_exist,
    pick_label_color,
)

__all__ = [
    "ACCESSIBLE_LABEL_COLORS",
    "GitHubGraphQLClient",
    "GraphQLError",
    "attach_labels",
    "ensure_labels_exist",
    "pick_label_color",
]
