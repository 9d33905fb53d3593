"""Sample operations and workflows."""
