"""
Version 1 of the store API.

The browser clients shipped with the store call these routes under the
unversioned ``/api`` prefix, so the prefix is configured in settings
rather than hard coded to ``/api/v1``.
"""
