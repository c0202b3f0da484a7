"""Service layer: identity resolution, sessions, content store and providers."""
