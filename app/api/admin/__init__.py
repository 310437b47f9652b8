"""
Admin API Module

Endpoints used by the admin console, all under /api/admin. Responses here
reflect live remote data and are never cached.
"""
