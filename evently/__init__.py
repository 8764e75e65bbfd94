"""Evently: event management API."""
