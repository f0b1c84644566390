"""Validation constants for feedings app."""

# Bottle feeding validation (ml)
MIN_BOTTLE_ML = 1
MAX_BOTTLE_ML = 500

# Duration validation (minutes)
MIN_FEEDING_MINUTES = 0
MAX_FEEDING_MINUTES = 180
