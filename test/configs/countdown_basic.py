from datetime import datetime, timezone

expires = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)

countdown_defaults = {
    "format": "valid for {remaining}",
    "update_interval": 0.5,
}

sink = "code_countdown"
