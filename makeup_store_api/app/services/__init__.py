"""
Service layer abstraction.

Each service encapsulates business logic for a domain and works on the
in-memory store document held by :class:`~makeup_store_api.app.core.storage.JsonStore`.
Services never raise HTTP errors themselves; "not found" is signalled by
returning ``None`` and rule violations by :class:`BillError`.
"""
