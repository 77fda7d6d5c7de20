"""Month-filtered sales transaction dashboard API."""
