"""
Tool installation service — helper-tool detection and installation.

Layers (each a subpackage):

    data       which tools each platform needs, and their package names
    detection  PATH lookups and package-manager selection (read-only)
    execution  elevated install commands (the only writer)
    resolver   the per-tool confirm/install workflow
"""
