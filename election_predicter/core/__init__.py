"""Project core.

Stable, non-domain-specific building blocks (errors).
"""
