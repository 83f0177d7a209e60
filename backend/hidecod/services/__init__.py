"""Services Layer — orchestrates gateway IO around pure core helpers.

Invariants:
    - Services never build HTTP responses; routes translate results
"""
