"""Location Share API: users, live journeys and friend lists over MongoDB."""
