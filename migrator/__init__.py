"""
Record Migrator

Migrates records between two record stores through an intermediate CSV
representation.

Supports:
- Value translation tables (ValueMapping.csv)
- Merging related exports (User + Group)
- Two-pass CSV validation and repair with a shared in-memory row cache
- Synthetic identifiers that stay unique across a whole run
- Interactive abort-or-continue decision when issues are found
- Count / delete / query phases per migrated object
"""

__version__ = "0.1.0"
