"""
Cloud storage file conversion endpoints.
"""
