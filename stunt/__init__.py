"""
stunt - a tiny language toolchain and its greeting command-line stub
"""

__version__ = "0.1.0"
