"""Service layer: tenant lifecycle and tenant management operations."""
