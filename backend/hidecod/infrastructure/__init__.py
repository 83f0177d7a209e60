"""Infrastructure Layer — logging setup and the Admin GraphQL client.

Invariants:
    - Only this layer performs network IO
"""
