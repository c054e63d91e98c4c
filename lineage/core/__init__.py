"""
Core utilities: exceptions, logging, validators and paths.
"""
