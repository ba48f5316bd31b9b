"""Plugins shipped with namebingo."""
