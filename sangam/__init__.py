"""Sangam - local-first study companion client."""
