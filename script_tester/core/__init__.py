"""
Core models, errors, routing and transforms.
"""
