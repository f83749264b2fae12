"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- Database repositories
- Password hashing and JWT signing
- Structured logging and the in-process event bus

Structure:
- persistence/: Database adapters (SQLAlchemy models and repositories)
- security/: bcrypt and PyJWT services
- logging/: structlog console adapter
- events/: InMemoryEventBus and event handlers

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
