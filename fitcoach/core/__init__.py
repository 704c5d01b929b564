"""Pure game rules: progression curve, reward table, streaks and achievements."""
