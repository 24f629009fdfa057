"""
repositories/ - Data Access Layer
==================================
The only place SQL is written. Each repository wraps one table, binds every
value as a query parameter, and returns domain model objects.
"""
