"""
stagedeploy - interactive deployment of staged web bundles and server archives.
"""

__version__ = '1.0.0'
