"""CLI layer — argument parsing, user interaction, and error boundary.

This package is the outermost layer of the application.  It may import
from ``core``, ``host``, ``plugin`` and ``infra``, but no
other layer may import from ``cli``.
"""
