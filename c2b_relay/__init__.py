"""
M-Pesa C2B relay.

Accepts {"phone", "amount"} on POST /c2b, normalizes the phone number to an
MSISDN and forwards a C2B simulate request to the Daraja API.
"""

__version__ = "1.0.0"
