# Example configuration for ``countdown run -c examples/countdown-config.py``

from datetime import datetime, timedelta, timezone

# Sync codes are valid for ten minutes from the moment they are shown
expires = datetime.now(timezone.utc) + timedelta(minutes=10)

countdown_defaults = {
    "format": "This temporary code is valid for the next {remaining}",
    "update_interval": 1.0,
}

sink = "countdown_text"

log_level = "INFO"
