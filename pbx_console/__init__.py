"""
PBX Console - multi-tenant admin console for phone-system users
"""

__version__ = "1.0.0"
