"""
Real HTTP integration clients.

These clients talk to the M-Pesa Daraja API over HTTPS using a static bearer token.

Important:
- Must implement the same interface as the mock clients (simulate / aclose)
- Must send payloads shaped according to c2b_relay/integrations/contracts/*

Switching:
The selection of mock vs real clients happens in c2b_relay/api/main.py only.
"""
