"""
LeetCode Progress Tracker - Source Package

A small personal tracker for solved practice problems, with
per-difficulty statistics and a cumulative progress chart.

DESIGN PRINCIPLES:
1. Everything stays on the user's machine
2. Deletes happen only after explicit confirmation
3. Derived views are recomputed from storage, never cached
4. Every change to the collection is logged
5. Storage layer is swappable
"""

__version__ = "1.0.0"
