from colors import broken
from . import palette

PURPLE = broken.BROKEN
