"""
Mock integration clients.

These clients return fake (but realistic) responses without calling any external API.
They are used when no M-Pesa bearer token is configured, or to exercise the
relay end-to-end without a Daraja sandbox account.

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
- Mock clients build the same payloads defined in c2b_relay/integrations/contracts/*
"""
