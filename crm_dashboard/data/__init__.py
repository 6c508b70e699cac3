"""
Data access layer.

Design rules:
- Controllers call ONLY functions in data.service.
- Every backend call goes through data.client.ApiClient (bearer + 401 handling).
- No env var reads here (config-only).
"""
