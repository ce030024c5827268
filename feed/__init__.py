"""Notification feed reconciliation app."""
