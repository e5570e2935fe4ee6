"""Saved-plan file collaborator."""
