"""
JWT authentication for protected routes.
"""
