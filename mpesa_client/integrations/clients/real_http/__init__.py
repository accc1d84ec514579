"""
Real HTTP integration clients.

These clients talk to Safaricom's Daraja endpoints over HTTPS:
- oauth.py: client-credentials token exchange and the authenticated client factory
- daraja.py: one coroutine per M-Pesa operation
"""
