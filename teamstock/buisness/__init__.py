"""
Domain layer for the team inventory system.
Contains validation, CSV transfer and the workflow managers, separated from
collection persistence concerns.
"""
