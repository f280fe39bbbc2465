"""HTTP surface of the auth service.

Routers translate requests into commands and queries, call the handlers
obtained from the container, and map Result values to responses. Status
code choices live here; authentication rules do not.
"""
