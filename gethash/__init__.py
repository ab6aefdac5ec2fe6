"""
gethash: recover numeric identifiers from six-bit packed hash exports.
"""

__version__ = "0.1.0"
