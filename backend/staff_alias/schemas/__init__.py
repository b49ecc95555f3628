"""Public schema exports shared across API route modules."""

from staff_alias.schemas.posts import PostCreate, PostEdit, PostRead, PostUpdate
from staff_alias.schemas.staff_alias import AliasAuditEntryRead, AliasStatusRead

__all__ = [
    "AliasAuditEntryRead",
    "AliasStatusRead",
    "PostCreate",
    "PostEdit",
    "PostRead",
    "PostUpdate",
]
