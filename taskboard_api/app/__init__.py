"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  The code is split into layers: ``storage`` holds the
persistence capability, ``services`` the business rules (membership
and ownership checks gating every mutation), and ``api`` the HTTP
routers.  Versioning is handled by grouping routers under the
``api/<version>/`` hierarchy.
"""

from .main import app  # noqa: F401
