"""Command-line interface.

The CLI can be run directly:
    python -m system_vitals.ui.cli snapshot

Note: CLI components are not exported here to avoid module loading issues
when running as a script.
"""

__all__: list[str] = []
