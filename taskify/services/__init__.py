"""gRPC service processes (users, boards)."""
