"""
Configuration for the multi-version tool installer.
"""
