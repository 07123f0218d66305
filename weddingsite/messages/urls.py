MESSAGES_URL = "/api/messages"
MARK_MESSAGE_READ_URL = "/api/messages/{message_id}/read"
