"""
Pydantic schema definitions for API payloads and stored records.

Each entity (users, projects, tasks, memberships) defines its own
models for request bodies and responses.  Field names are snake_case
in Python and camelCase on the wire (``ownerId``, ``assigneeId``).
"""
