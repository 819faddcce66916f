"""Session tracker components."""
