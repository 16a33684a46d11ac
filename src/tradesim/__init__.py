"""Simulated crypto trading demo backend."""
