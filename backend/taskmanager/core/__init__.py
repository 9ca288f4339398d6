"""
Core application modules.
Contains essential infrastructure components:
- db: Database configuration and connection management
- errors: Error taxonomy and HTTP exception handlers
- security: Password hashing and access token signing/verification
"""
