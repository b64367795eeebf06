"""
Pydantic schemas for posts, queries and dashboard views
"""
