"""
Infrastructure layer: file discovery, module loading, configuration and logging.
"""
