"""CLI package.

The ``cli`` sub-package contains the Click application and all
command implementations. It should import only from the public API
of the parent packages, never reach into shape internals.
"""
from __future__ import annotations
