"""
Authentication module for the clinic staff portal.

This module provides authentication and authorization functionality including:
- Password hashing and verification
- Signed bearer token issuance at login
- Per-request session verification against the live user record
- Role-based access control for protected operations
"""
