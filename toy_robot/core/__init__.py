"""Core of the toy robot simulator: configuration and the pure grid model."""
