"""
Feature modules for the accounts backend.

Each module keeps the same shape:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- service.py or repository.py: the implementation
- exceptions.py: Module-specific exceptions

Only accounts carries its own router (routes.py). Modules depend on each
other's interfaces; concrete classes are wired in api.dependencies.
"""
