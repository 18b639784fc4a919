"""Application constants."""

# Rest timer quick picks (seconds); the default rest comes from Settings.default_rest_seconds
REST_TIME_PRESETS = (30, 60, 90, 120)

# Calendar maths
SECONDS_PER_MINUTE = 60

# Chart windows (weeks back from today)
MONTH_CHART_WEEKS = 4
ALL_CHART_WEEKS = 12
RECENT_WORKOUTS_CHART_LIMIT = 10
