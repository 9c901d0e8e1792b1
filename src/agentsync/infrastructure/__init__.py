"""Infrastructure layer: git, filesystem discovery, and output writes.

Depends on the domain layer, never the reverse.
"""
