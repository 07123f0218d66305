LIST_RSVPS_URL = "/api/rsvps"
EXPORT_RSVPS_URL = "/api/rsvps/export"
SEND_REMINDERS_URL = "/api/reminders/send"
