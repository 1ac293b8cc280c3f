"""Single-card construction strategies."""
