"""Users context: served by the users gRPC service."""
