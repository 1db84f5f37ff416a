"""Domain models shared by the repository and service layers."""
