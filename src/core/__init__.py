"""Core domain package for shlinkify.

Core contains the save-sync decision logic, tag aggregation and association
lookup without any HTTP, SQLite or CLI code, keeping the business logic
portable across hosts.
"""
