"""Adapters binding the core ports to SQLite, HTTP and error reporting."""
