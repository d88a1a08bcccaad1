"""Find repository contributors whose GitHub accounts no longer exist"""

__version__ = "0.1.0"
