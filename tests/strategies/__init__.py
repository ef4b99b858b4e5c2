"""Shared Hypothesis strategies."""
