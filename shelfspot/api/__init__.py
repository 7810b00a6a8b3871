"""
==============================================================================
API Package
==============================================================================

REST API mounted under /api.

==============================================================================
"""
