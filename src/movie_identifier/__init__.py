"""Movie Identifier.

Matches local movie files with canonical TMDb metadata through an ordered
chain of lookup strategies and reconciles the results into a local library
database.
"""

try:
    # Try to get version from setuptools_scm (when installed from git)
    from ._version import version as __version__
except ImportError:
    # Final fallback for development
    __version__ = "0.1.0-dev"
