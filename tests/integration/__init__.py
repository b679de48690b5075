"""Integration tests package.

Adapters are exercised against emulated backends: fakeredis for the
resource store and file-backed SQLite for the query executor.
"""
