"""Centralized constants for the kioku scheduler.

All tuning numbers and defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Ease ----------
MIN_EASE_FACTOR = 1.3
STARTING_EASE_FACTOR = 2.5
EASE_PENALTY = 0.2

# ---------- Intervals ----------
LEARNING_STEPS = (1, 3)  # days for new items: 1d -> 3d -> SM-2
EASY_LEARNING_MULTIPLIER = 2
GRADUATION_INTERVAL = 6
HARD_INTERVAL_FACTOR = 0.8
EASY_INTERVAL_BONUS = 1.3

# ---------- Confidence ----------
KNOWN_MIN_INTERVAL = 21  # strictly greater than this
KNOWN_MIN_ACCURACY = 0.85
REVIEWING_MIN_CORRECT = 3
YOUNG_ITEM_MAX_REVIEWS = 2

# ---------- XP / Levels ----------
XP_REWARDS = {"again": 2, "hard": 10, "good": 10, "easy": 15}
STREAK_BONUS_MULTIPLIER = 2
XP_PER_LEVEL = 500
SESSION_COMPLETION_XP = 25
LEVEL_TITLES = (
    (5, "Beginner"),
    (10, "Student"),
    (20, "Reader"),
    (35, "Expert"),
)
TOP_LEVEL_TITLE = "Master"

# ---------- Progress ----------
DEFAULT_DAILY_GOAL = 10

# ---------- Queue Builder ----------
DEFAULT_QUEUE_LIMIT = 10
MAX_QUEUE_LIMIT = 50
FORECAST_DAYS = 7

# ---------- Proficiency ----------
# (jlpt level, kanji known, vocab known), hardest first
JLPT_THRESHOLDS = (
    (1, 2000, 10000),
    (2, 1000, 6000),
    (3, 370, 3750),
    (4, 170, 1500),
    (5, 80, 800),
)
N5_PARTIAL_KANJI = 40
N5_PARTIAL_VOCAB = 400
