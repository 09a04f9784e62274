"""Data access managers for the workspace store.

Managers own their SQL and raise domain exceptions from
``boardstore.server.errors``, never HTTP exceptions -- that translation is
the router's responsibility.
"""
