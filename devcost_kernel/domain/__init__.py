"""Pure domain value objects for the devcost kernel."""
