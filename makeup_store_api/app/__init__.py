"""
Application package initializer.

This package contains the main entrypoint for the store backend and
all of its submodules.  Each domain (products, bills) keeps its
schemas, service and router in separate modules, and the routers are
grouped under the ``api/<version>/`` hierarchy.

The application object lives in ``main`` and is not imported here, so
the clients can use ``core.catalog`` without building a server.
"""
