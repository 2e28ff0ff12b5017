"""Business logic services for the CallCat scheduling service."""
