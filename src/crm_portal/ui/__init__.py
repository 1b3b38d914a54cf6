"""Server-rendered pages over the CRM objects API.

- GET /              lists records of the configured object type
- GET /update-cobj   shows the create form
- POST /update-cobj  creates a record, then redirects back to the list
"""
