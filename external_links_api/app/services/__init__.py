"""
Service layer abstraction.

Services orchestrate repository calls for one domain.  They own the
transaction boundary of every write so that API handlers never deal
with connections or partial state.
"""
