"""Entity status workflows."""
