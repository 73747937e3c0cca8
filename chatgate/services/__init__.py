"""Domain services: credentials, authentication, permissions, conversations, completion."""
