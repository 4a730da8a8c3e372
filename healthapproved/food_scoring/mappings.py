"""Fixed lists and thresholds of the health score.

These are part of the scoring contract, not deployment configuration.
"""

# Case-insensitive substring match against product.category
ULTRA_PROCESSED_CATEGORIES = (
    "instant noodles",
    "potato chips",
    "sugar confectionery",
    "processed meat",
    "premix",
    "soft drink",
    "cola",
    "energy drink",
    "breakfast cereal (sweetened)",
)

# Substring match against ingredient tokens; bonus applies at most once
POSITIVE_INGREDIENTS = (
    "whole wheat",
    "millets",
    "ragi",
    "jowar",
    "bajra",
    "oats",
    "nuts",
    "almonds",
    "peanuts",
    "chana",
    "moong",
    "urad",
    "rajma",
    "chickpea",
)

PALM_OIL_MARKERS = ("palm", "palmolein")

START_SCORE = 100
MIN_SCORE = 0
MAX_SCORE = 100

# Status bands
APPROVED_MIN_SCORE = 80
NOT_APPROVED_BELOW = 60

ULTRA_PROCESSED_PENALTY = 18

# Nutrient values are per 100g (sugar/fats in g, sodium in mg)
SUGAR_THRESHOLD = 5
SUGAR_SLOPE_CAP = 25
HIGH_SUGAR_THRESHOLD = 22.5
HIGH_SUGAR_PENALTY = 15

SODIUM_THRESHOLD = 120
SODIUM_STEP_MG = 100
SODIUM_SLOPE_CAP = 20
HIGH_SODIUM_THRESHOLD = 600
HIGH_SODIUM_PENALTY = 15

TRANS_FAT_PENALTY = 25
SAT_FAT_THRESHOLD = 5
SAT_FAT_PENALTY = 5

RED_DEFAULT_SEVERITY = 10
AMBER_DEFAULT_SEVERITY = 5
AMBER_MAX_PENALTY = 10

PALM_OIL_PENALTY = 7
POSITIVE_BONUS = 6

# Reason texts
REASON_ULTRA_PROCESSED = "Ultra-processed category"
REASON_HIGH_SUGAR = "High sugar"
REASON_HIGH_SODIUM = "High sodium"
REASON_TRANS_FAT = "Contains trans fat"
REASON_PALM_OIL = "Refined palm oil/palmolein"

# Highlight notes when the KB entry has no short note
RED_DEFAULT_NOTE = "Avoid frequent use"
AMBER_DEFAULT_NOTE = "Limit intake"
GREEN_NOTE = "Generally safe"
