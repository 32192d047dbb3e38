"""
Core utilities shared across the product and user services.

This package hosts:
- configuration helpers (env vars, service names, upstream URLs)
- cross-cutting concerns such as logging setup and the Prometheus
  counters each service increments.

Routers and services depend on these primitives instead of reading
os.environ or touching prometheus_client directly.
"""
