"""
HTTP presentation adapter.
"""
