"""
Command-line byte-sequence composer.

This package provides:
- An append-only byte buffer shared by every action of a run
- A fixed registry of encoding actions (hex, pad, zero, mac, vlan)
- Grouping of a flat argument list into per-action groups split on ``^``
- Dispatch of each group to its encoder and the whole-run compose driver
"""

__version__ = "0.1.0"
