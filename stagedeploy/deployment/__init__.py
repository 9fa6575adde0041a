"""
Deployment package.

This package contains the bundle and single-file deployers, the backup
rotator they share, and the results they report back to the menu.
"""

__all__ = ['bundle', 'archive', 'rotation', 'results', 'utils']
