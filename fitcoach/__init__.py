"""FitCoach backend: workout plans, exercise logging and the reward engine."""
