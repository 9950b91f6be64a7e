"""
CloudNotes.

- backend/: REST API, services, database models, configuration
"""
