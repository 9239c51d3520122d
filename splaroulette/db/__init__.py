"""Database Infrastructure - SQLAlchemy Base for the key-value table.

Invariants:
    - Single engine per store instance (created by SqlKeyValueStore)
"""
