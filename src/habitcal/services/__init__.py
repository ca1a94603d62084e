"""Domain services: streaks, the check window, boards and auth."""
