"""REST gateway application."""
