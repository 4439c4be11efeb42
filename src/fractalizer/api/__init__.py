"""API layer: canonical resource surface for the CLI and any HTTP adapter.

This module provides the stable read model API. Key rules:

1. No SQLAlchemy imports - only call repo functions (Session is allowed for type hints)
2. Validate the include selection before querying, so rejected requests touch no rows
3. Return envelopes ({"data": ..., "meta": ...}) built by the Fractalizer only
4. Routing, auth and HTTP status mapping belong to the caller
"""
