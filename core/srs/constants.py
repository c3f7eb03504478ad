"""
SRS Constants and Parameters

All tunable values for priority scoring, lesson selection and the
SM-2 style interval update in one place.
"""


# ---- Priority Scoring ----

NEVER_PRACTICED_PRIORITY = 1000.0  # Unseen items always come first

OVERDUE_BASE = 500.0        # Floor for due/overdue items
OVERDUE_PER_DAY = 10.0      # Bonus per day overdue
OVERDUE_MAX_BONUS = 200.0   # Saturates after 20 days overdue

UPCOMING_BASE = 100.0       # Score of an item due right now (not yet overdue)
UPCOMING_DECAY_PER_DAY = 5.0  # Reaches 0 twenty days before due

NO_SCHEDULE_PRIORITY = 50.0  # Practiced but no next_practice recorded (legacy)


# ---- Lesson Selection ----

TOP_TIER_MULTIPLIER = 3  # Sample from the top count * 3 candidates


# ---- Schedule Update (SM-2 inspired) ----

DEFAULT_EASE = 2.5
MIN_EASE = 1.3
DEFAULT_INTERVAL = 1     # days

FIRST_INTERVAL = 1       # days, after first practice
SECOND_INTERVAL = 3      # days, after second practice
MAX_INTERVAL = 180       # days


# ---- Time ----

SECONDS_PER_DAY = 86400.0
