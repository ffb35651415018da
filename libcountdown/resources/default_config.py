# Default configuration for the countdown runner.
#
# A user config file only needs to set the values it wants to change. The
# expiry accepts an aware or naive datetime (naive values are UTC), an ISO
# 8601 string or seconds since the epoch.

expires = None

# Options passed to every CountdownPresenter, e.g.
# {"format": "Code expires in {remaining}", "update_interval": 1.0}
countdown_defaults = {}

# Identifier of the text surface the countdown is written to
sink = "countdown_text"

log_level = "WARNING"
