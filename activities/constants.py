"""Constants for activities app."""

# Prescription autocomplete
TOP_PRESCRIPTIONS_LIMIT = 10
MIN_PRESCRIPTION_SEARCH_LENGTH = 3
