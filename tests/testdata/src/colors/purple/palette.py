import sys

SHADES = ("#800080",) if sys.version_info >= (3,) else ()
