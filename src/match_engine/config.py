from src.match_engine.models import BrownlowFormat, Position

# Rating buckets: 60-64 -> 0, 65-69 -> 1, ..., 95-99 -> 7
RATING_FLOOR = 60
BUCKET_WIDTH = 5
BUCKET_COUNT = 8
INTRA_BUCKET_STEP = 0.015  # +1.5% of base per rating point inside a bucket

# Out-of-position penalties
SAME_LINE_PENALTY = 3
CROSS_LINE_PENALTY = 8

# Per-player performance multiplier = form * variance
FORM_FACTOR_RANGE = (0.5, 1.5)
PLAYER_VARIANCE_RANGE = (0.7, 1.3)

STAT_CATEGORIES = (
    "disposals", "goals", "behinds", "tackles", "marks", "intercepts", "hitouts",
)

# Base output per position and category, 8 buckets low -> high rating.
# Categories missing for a position are always 0 for that position.
CATEGORY_TABLES = {
    Position.MID: {
        "disposals": [6, 8, 10.5, 13, 15.5, 18, 20.5, 23],
        "tackles": [2, 2.5, 3, 3.5, 4, 4.5, 5, 5.5],
        "marks": [1.5, 2, 2.5, 3, 3.5, 4, 4.5, 5],
        "intercepts": [0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 1.0],
    },
    Position.RUC: {
        "disposals": [4, 5, 6, 7, 8, 9, 10, 11.5],
        "tackles": [1.5, 2, 2.3, 2.6, 3, 3.3, 3.6, 4],
        "marks": [1.5, 2, 2.3, 2.6, 3, 3.3, 3.6, 4],
    },
    Position.DEF: {
        "disposals": [5, 6.5, 8, 9.5, 11, 12.5, 14, 16],
        "tackles": [1.5, 1.8, 2, 2.3, 2.6, 3, 3.3, 3.6],
        "marks": [2, 2.5, 3, 3.5, 4, 4.5, 5, 5.5],
        "intercepts": [1.5, 2, 2.5, 3, 3.5, 4, 4.5, 5],
    },
    Position.KDEF: {
        "disposals": [3.5, 4.5, 5.5, 6.5, 7.5, 8.5, 9.5, 10.5],
        "tackles": [1, 1.2, 1.4, 1.6, 1.8, 2, 2.2, 2.4],
        "marks": [3, 3.5, 4.2, 5, 5.8, 6.5, 7.2, 8],
        "intercepts": [2, 2.5, 3, 3.6, 4.2, 4.8, 5.4, 6],
    },
    Position.FWD: {
        "disposals": [4, 5, 6, 7, 8.5, 10, 11.5, 13],
        "tackles": [1.5, 1.8, 2, 2.3, 2.6, 3, 3.3, 3.6],
        "marks": [1.5, 2, 2.5, 3, 3.5, 4, 4.5, 5],
    },
    Position.KFWD: {
        "disposals": [3, 3.5, 4, 5, 6, 7, 8, 9],
        "tackles": [0.8, 1, 1.1, 1.3, 1.5, 1.7, 1.9, 2.1],
        "marks": [2.5, 3, 3.5, 4, 4.8, 5.5, 6.2, 7],
    },
}

# Goal kicking shape per position:
#   chance        - probability of kicking any goal, per bucket
#   base          - goals kicked when scoring, per bucket (before multiplier)
#   spread        - half-width of the uniform noise added to goals
#   ceiling       - most goals the position can kick in a match
#   behind_ratio  - behinds per goal
#   behind_noise  - upper bound of the uniform behind noise
SCORING_PROFILES = {
    Position.KFWD: {
        "chance": [0.70, 0.75, 0.80, 0.84, 0.88, 0.91, 0.94, 0.96],
        "base": [1.0, 1.4, 1.8, 2.2, 2.7, 3.2, 3.8, 4.5],
        "spread": 1.5,
        "ceiling": 9,
        "behind_ratio": 0.7,
        "behind_noise": 2.5,
    },
    Position.FWD: {
        "chance": [0.45, 0.50, 0.55, 0.60, 0.65, 0.70, 0.75, 0.80],
        "base": [1.0, 1.1, 1.3, 1.5, 1.7, 2.0, 2.3, 2.6],
        "spread": 1.0,
        "ceiling": 5,
        "behind_ratio": 0.7,
        "behind_noise": 2.0,
    },
    Position.MID: {
        "chance": [0.08, 0.09, 0.10, 0.11, 0.12, 0.13, 0.14, 0.15],
        "base": [1.0, 1.0, 1.0, 1.0, 1.1, 1.2, 1.3, 1.4],
        "spread": 0.5,
        "ceiling": 2,
        "behind_ratio": 0.5,
        "behind_noise": 1.5,
    },
    Position.RUC: {
        "chance": [0.08, 0.09, 0.10, 0.11, 0.12, 0.13, 0.14, 0.15],
        "base": [1.0] * 8,
        "spread": 0.3,
        "ceiling": 1,
        "behind_ratio": 0.5,
        "behind_noise": 1.0,
    },
    Position.DEF: {
        "chance": [0.04, 0.045, 0.05, 0.055, 0.06, 0.065, 0.07, 0.08],
        "base": [1.0] * 8,
        "spread": 0.3,
        "ceiling": 1,
        "behind_ratio": 0.5,
        "behind_noise": 0.8,
    },
    Position.KDEF: {
        "chance": [0.01, 0.01, 0.015, 0.015, 0.02, 0.02, 0.025, 0.03],
        "base": [1.0] * 8,
        "spread": 0.3,
        "ceiling": 1,
        "behind_ratio": 0.5,
        "behind_noise": 0.6,
    },
}

# Ruck contest
RUCK_HITOUT_BASE = [16, 19, 22, 25, 28, 30, 33, 36]
RUCK_RATING_DIFF_WEIGHT = 0.25
RUCK_CONTEST_NOISE = (-3.0, 3.0)
RUCK_CONTEST_BOUNDS = (6, 52)
RUCK_SOLO_SCALE = 1.3
RUCK_SOLO_NOISE = (0.0, 7.0)
RUCK_SOLO_FLOOR = 25

# Derived scores
FANTASY_WEIGHTS = {
    "disposals": 2,
    "goals": 6,
    "behinds": 1,
    "tackles": 3,
    "marks": 3,
    "intercepts": 4,
    "hitouts": 1,
}

IMPACT_WEIGHTS = {
    "goals": 8,
    "disposals": 0.8,
    "tackles": 1.5,
    "marks": 1.2,
    "hitouts": 0.15,
    "intercepts": 1.8,
}

# (category, threshold, bonus) for exceptional output
IMPACT_BONUSES = [
    ("disposals", 30, 5),
    ("goals", 4, 6),
    ("hitouts", 45, 4),
    ("intercepts", 6, 3),
]

# Team scoring
GOAL_POINTS = 6
BEHIND_POINTS = 1
DEFAULT_TEAM_OVERALL = 75
TEAM_STRENGTH_BASE = 0.85
TEAM_STRENGTH_DIVISOR = 150
MATCH_VARIANCE_RANGE = (0.8, 1.2)

# Award votes
COACHES_VOTE_VECTOR = [10, 8, 7, 3, 2, 2, 2, 1, 1, 1]
COACHES_RECIPIENT_DIVISOR = 3
COACHES_MIN_RECIPIENTS = 5
COACHES_MAX_RECIPIENTS = 10

BROWNLOW_VOTE_VECTORS = {
    BrownlowFormat.THREE_TWO_ONE: [3, 2, 1],
    BrownlowFormat.FIVE_TO_ONE: [5, 4, 3, 2, 1],
}
DEFAULT_BROWNLOW_FORMAT = BrownlowFormat.THREE_TWO_ONE
