"""
Core services — catalog discovery, installation and shell registration.
"""
