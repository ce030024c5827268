"""Services for the feed app.

Service singletons are not re-exported here to avoid circular imports
during Django app initialization. Import directly from the modules.
"""
