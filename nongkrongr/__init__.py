"""Nongkrongr cafe directory API."""
