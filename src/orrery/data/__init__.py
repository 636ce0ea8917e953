"""Seed data for the orrery."""
