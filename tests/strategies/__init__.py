"""Hypothesis strategies for loctable property-based testing."""
