import colors.missing
from colors import red

BROKEN = red.RED
