# Hospital laboratory workflow tracker

__version__ = "1.0.0"
