"""Resolver package for the GraphQL schema.

Functions here are referenced by the GraphQL types, queries and mutations
and talk to the database through ``get_async_session``.
"""
