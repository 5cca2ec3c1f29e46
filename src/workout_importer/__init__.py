"""Workout CSV importer: parse tracker exports into stored workout records."""
