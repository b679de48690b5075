"""Application layer - Use case orchestration.

Structure:
    services/   ResourceTypeRegistry, ActionDispatcher
    commands/   Provisioning and privilege administration (CQRS writes)
    errors/     ApplicationError for the presentation layer
"""
