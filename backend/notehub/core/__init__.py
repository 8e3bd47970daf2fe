# notehub/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Startup checks for external collaborators
- db: Database configuration and connection management
- errors: Error hierarchy and JSON error rendering
- quota: Process-wide blob store quota gate
- security: Hashing and verification of stored credentials
- upload_limit: Transport-level upload size guard
"""
