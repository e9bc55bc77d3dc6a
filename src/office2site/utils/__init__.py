"""Utility helpers for office2site."""
