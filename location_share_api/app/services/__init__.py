"""
Service layer abstraction.

Each service encapsulates the business rules for a domain and talks to
MongoDB through ``core.db``, so API handlers never touch collections
directly.
"""
