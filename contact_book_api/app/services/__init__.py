"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  API handlers
only translate service results and exceptions into HTTP responses.
"""
