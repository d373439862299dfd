"""Document portal application package.

Layers follow the usual split: ``domain`` entities, ``application`` use cases,
``infrastructure`` adapters (database, storage) and ``interfaces`` (HTTP API
and the client page).
"""
