"""Allow ``python -m stream_levels`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m stream_levels`` behaves identically to the
``stream-levels`` console script.
"""

from __future__ import annotations

from stream_levels.cli.app import cli

if __name__ == "__main__":
    cli()
