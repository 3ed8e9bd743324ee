"""GraphQL API for Quill (Strawberry)."""
