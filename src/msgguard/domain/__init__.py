"""Domain layer — paths, policies, fields, and the error taxonomy.

This layer depends only on stdlib.
It must never import from services, infrastructure, output, or config.
"""
