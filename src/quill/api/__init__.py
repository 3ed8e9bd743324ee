"""HTTP application for the Quill GraphQL API."""
