"""
API package containing versioned routes.

This package groups API versions under subpackages such as ``v1``.  A
version subpackage exposes a top‑level ``router`` which includes all
of its endpoints.  ``deps`` wires services to the storage attached to
the running application and ``errors`` renders failures as JSON.
"""
