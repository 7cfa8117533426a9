"""
Adapters layer: configuration files and CLI
"""
