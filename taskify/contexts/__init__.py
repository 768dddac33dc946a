"""Entity contexts.

Each context owns its domain types, persistence adapter and use cases.
`users` and `boards` additionally expose a gRPC adapter and client;
`columns` and `tasks` are called in-process by the gateway.
"""
