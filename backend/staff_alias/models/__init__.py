"""Model exports for SQLAlchemy/SQLModel metadata discovery."""

from staff_alias.models.alias_audit_entries import AliasAction, AliasAuditEntry
from staff_alias.models.alias_post_markers import AliasPostMarker
from staff_alias.models.posts import Post, PostRevision
from staff_alias.models.users import User

__all__ = [
    "AliasAction",
    "AliasAuditEntry",
    "AliasPostMarker",
    "Post",
    "PostRevision",
    "User",
]
