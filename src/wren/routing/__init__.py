"""Routing — handler registry and route-pattern matching.

Handlers are registered in groups during setup; the dispatch engine reads
the registry without ever mutating it.
"""
