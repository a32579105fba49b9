__title__       = "pfeistel"
__version__     = "1.0"
__license__     = "MIT"
__description__ = "File cipher that runs 128-byte blocks through a rotating-key Feistel network."
__keywords__    = "feistel cipher block ecb encrypt decrypt file"
__author__      = "pfeistel contributors"

__all__ = ['__version__', '__description__']
