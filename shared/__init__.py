"""
Shared utilities for the token service.

This package aggregates common building blocks consumed by the service:

- config: Service configuration via pydantic-settings
- logging: Structured logging with request correlation
- errors: Canonical error types and responses
- test_helpers: Key material, known-answer tokens and a PyJWT oracle for tests

Any cross-service logic should live here to avoid import cycles across
service packages. Do not import from service_* packages into shared/.
"""
