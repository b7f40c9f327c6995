"""
Common App - shared error taxonomy and API error rendering.

Every app raises exceptions derived from :mod:`apps.common.exceptions`; the
REST framework renders them through
:func:`apps.common.exception_handler.api_exception_handler`.
"""
