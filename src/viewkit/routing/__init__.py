"""Routing: the pattern router, view registration, and the fluent builder.

Routes are registered during setup and frozen when the router serves
its first request.
"""
