"""Brimis equipment-repair workflow service."""
