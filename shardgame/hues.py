"""Hue values used for coloured text and items."""

MAGENTA = 120
RED = 37
GREY = 0x3B2