"""
User Record Store

FastAPI service mapping /api/users routes onto single parameterized
statements against the PostgreSQL users table.
"""

__version__ = "1.0.0"
