"""Host layer — the minimal player runtime the levels plugin plugs into.

Provides events, components with disposal, a control bar, generic
menu widgets, a player holding its tech, a plugin registry, and the
tech classes.  It is deliberately thin: it exists so that the adapter
layer has a concrete surface to run against.

Import submodules directly; this package re-exports nothing so that
``core`` can depend on :mod:`stream_levels.host.techs` without cycles.
"""
