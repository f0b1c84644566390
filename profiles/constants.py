"""Default settings for new baby profiles."""

# Feeding
DEFAULT_FEEDING_VOLUME_ML = 60
DEFAULT_FEEDING_INTERVAL_MINUTES = 3 * 60
DEFAULT_NIGHT_FEEDING_INTERVAL_MINUTES = 4 * 60
DEFAULT_NURSING_MINUTES_PER_SIDE = 15

# Pumping
DEFAULT_PUMPING_DURATION_MINUTES = 30
DEFAULT_PUMPING_INTERVAL_MINUTES = 3 * 60
DEFAULT_NIGHT_PUMPING_INTERVAL_MINUTES = 4 * 60

# Daytime windows, half-open [start, end) in local hours
DEFAULT_BABY_DAYTIME_START_HOUR = 7
DEFAULT_BABY_DAYTIME_END_HOUR = 19
DEFAULT_PARENT_DAYTIME_START_HOUR = 6
DEFAULT_PARENT_DAYTIME_END_HOUR = 24

# Notifications
DEFAULT_ENABLE_NOTIFICATION = True

# Validation
MAX_INTERVAL_MINUTES = 24 * 60
MAX_FEEDING_VOLUME_ML = 500
