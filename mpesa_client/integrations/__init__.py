"""
Integrations layer.
This package contains all code used to communicate with the M-Pesa Daraja API:
- contracts: enums, credentials and one request model per operation
- policy: STK push passwords, security credential derivation, response helpers
- clients/real_http: OAuth exchange and the endpoint operations

Key rule:
- Only clients/real_http makes HTTP calls.
"""
