"""
Boundary layer: adapters for external collaborators.

AI gateway, embedding store, document store, and resume object storage.
"""
