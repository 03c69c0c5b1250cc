"""
Integrations layer.
This package contains all code used to communicate with external systems:
- M-Pesa Daraja C2B simulate API

Key rule:
- Endpoints MUST NOT call external APIs directly.
- Endpoints call integration clients (under c2b_relay/integrations/clients).
- We use MOCK clients during development and swap to REAL_HTTP clients when a token is configured.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (c2b_relay/api/main.py).
"""

from .contracts.c2b import C2BRequest, PushRequest

__all__ = ["C2BRequest", "PushRequest"]
