"""Domain layer - Pure authorization logic.

Contains the privilege model (actions, branches, action sets), the Resource
entity, the privilege evaluator, dispatch errors and the protocols (ports)
through which the core reaches its external collaborators. The domain layer
has NO framework or infrastructure dependencies.

Structure:
    entities/       Resource
    value_objects/  Action, Branch, ActionSet, ExecutionContext
    services/       Privilege evaluator (pure functions)
    errors/         Dispatch error types
    protocols/      ResourceStoreProtocol, QueryExecutorProtocol, LoggerProtocol
"""
