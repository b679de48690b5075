"""Test suite for capgate.

Test structure follows the test pyramid:
- unit/: Unit tests - domain and application logic with doubles
- integration/: Integration tests - store and executor against fakeredis / SQLite
- api/: API endpoint tests - HTTP binding via TestClient
"""
