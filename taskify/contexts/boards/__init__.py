"""Boards context: served by the boards gRPC service."""
