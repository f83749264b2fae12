"""Domain layer - Pure business logic.

This layer contains the core business entities, authorization policies,
protocols (ports) and domain events. The domain layer has NO dependencies
on any framework or infrastructure.

Structure:
- entities/: Domain entities (mutable, have identity)
- policies/: Record-level authorization predicates and scopes
- value_objects/: Value objects (immutable, no identity)
- protocols/: Repository and service interfaces
- events/: Domain events (things that happened in the domain)
"""
