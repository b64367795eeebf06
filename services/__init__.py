"""
Dashboard pipeline services
"""
