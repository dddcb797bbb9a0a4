"""
jia-file - file operations over HTTP for a single directory tree.

The core lives in jiafile.FileSystemGate; configuration in jiafile.Config.
"""

__version__ = "0.1.0"
