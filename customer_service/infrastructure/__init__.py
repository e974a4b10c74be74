"""Infrastructure layer for the Customer Service: auth, clients, persistence."""
