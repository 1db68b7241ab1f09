"""
Observability for GeoCat: loguru logging, Prometheus metrics and health endpoints.
"""
