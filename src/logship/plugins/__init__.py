"""Integrations of the shipping engine with async logging pipelines."""
