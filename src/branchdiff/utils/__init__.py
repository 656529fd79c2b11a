"""Utility modules for branchdiff."""
