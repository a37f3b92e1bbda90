"""
Business logic services shared across API modules
"""
