"""Hide COD by City — payment customization backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
