"""
Core infrastructure: logging, configuration, validation
"""
