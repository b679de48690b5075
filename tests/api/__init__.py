"""API tests package.

End-to-end tests for REST API endpoints using TestClient.
Tests the complete request/response cycle including:
- Caller identity and admin token handling
- Dispatch through the real ActionDispatcher over an in-memory store
- RFC 9457 error formatting and HTTP status codes
"""
