"""
Core — Shared Constants

@file core/constants.py
"""

AUDIT_ACTION_CREATE = 'CREATE'
AUDIT_ACTION_UPDATE = 'UPDATE'
AUDIT_ACTION_DELETE = 'DELETE'

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
