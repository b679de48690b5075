"""capgate - capability-based authorization proxy.

Sits between callers and backend data operations, exposing each operation
only after checking a per-resource, per-user privilege level.
"""

__version__ = "0.1.0"
