"""
Authentication module for the hospital system.

This module provides:
- User registration and login with bcrypt password hashing
- Signed access tokens accepted as bearer headers or ?token= parameters
- Active user listings and self-service account deactivation
"""
