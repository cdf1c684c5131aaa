"""Shop catalog backend.

Products, hierarchical categories, hierarchical collections and shops,
served over a REST interface.
"""
