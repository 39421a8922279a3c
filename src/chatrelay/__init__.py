"""ChatGuru webhook receiver and outbound message relay."""
