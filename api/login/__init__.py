"""
OAuth login state endpoints.
"""
