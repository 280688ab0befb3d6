"""
Persistence layer: record types, collection stores and repositories
"""
