"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  The code is split into layers: ``api`` (HTTP routing),
``services`` (orchestration of writes), ``repositories`` (SQL access
to the three link tables), ``schemas`` (request/response payloads) and
``models`` (plain records mirroring table rows).
"""

from .main import app  # noqa: F401
