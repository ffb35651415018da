expires = "2030-01-01T14:00:00+02:00"
log_level = "debug"
