"""Generate typed Apollo client wrappers from GraphQL operations."""
