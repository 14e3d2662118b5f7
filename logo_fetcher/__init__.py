"""
logo_fetcher

Pulls the NYSE symbol list and the matching company logos into a directory.

Design goals:
- Upstream symbol table is fail-fast (any error aborts the run)
- Per-logo failures are isolated (logged, never raised)
- Concurrency is capped by a fixed job count
- Re-runs skip logos already on disk unless forced
"""

__version__ = "0.1.0"
