"""
Ownership and membership predicates.

These are plain functions of the current store state.  Nothing is
cached between calls, so a revoked membership takes effect on the
very next request.  The owner is never stored as a membership row;
``is_member`` computes the union of ownership and explicit grants.
"""

from ..storage.base import Storage


def is_owner(storage: Storage, user_id: int, project_id: int) -> bool:
    """Return True iff ``user_id`` owns the project.  False if it is absent."""
    project = storage.get_project(project_id)
    return project is not None and project.owner_id == user_id


def is_member(storage: Storage, user_id: int, project_id: int) -> bool:
    """Return True iff ``user_id`` owns the project or holds a membership row.

    False if the project is absent.
    """
    project = storage.get_project(project_id)
    if project is None:
        return False
    if project.owner_id == user_id:
        return True
    return storage.find_membership(project_id, user_id) is not None
