DISCLAIMER = ("Think of this as a budgeting aid, not financial advice. Results use common rental "
"guidelines (the 30% rule, 3x-rent income checks) and are estimates only. Actual approval depends on "
"credit score, rental and job history, and each landlord's own criteria. All amounts in USD.")

# Rent-to-income guideline and tier cut-offs (percent of monthly income).
RECOMMENDED_RENT_PCT = 30
RENT_TIER_LIMITS = {"conservative": 30, "moderate": 40}

# Disposable income tier floors (dollars left per month).
DISPOSABLE_TIER_FLOORS = {"tight": 200, "comfortable": 500}
EMERGENCY_BUFFER = 500

# Landlord approval score. Marketing heuristics kept as literal constants.
SCORE_BASE = 50
SCORE_RATIO_STEPS = [(25, 30), (30, 20), (35, 10)]
SCORE_RATIO_HIGH = (40, -10)
SCORE_DISPOSABLE_STEPS = [(1000, 20), (500, 10)]
SCORE_DISPOSABLE_LOW = (200, -10)
SCORE_BANDS = {"excellent": 80, "strong": 60}

# Move-in costs on top of first month + deposit.
APPLICATION_FEES = 150
MOVING_ESSENTIALS = 400

COLORS = {"green": "#2CB853", "yellow": "#FAD75E", "orange": "#E16733", "brown": "#9A4927", "ink": "#12401F"}

RENTERS_GUIDE = [
    ("What is the 30% rule?",
     "Spend no more than 30% of gross monthly income on rent. Keeps other expenses manageable."),
    ("How do I calculate affordable rent?",
     "Gross monthly income × 0.30 = baseline rent budget. Adjust based on debt and goals."),
    ("What costs beyond rent should I budget?",
     "Utilities ($100-$250), internet ($50-$150), renter's insurance ($15-$40), parking (varies). "
     "Add $150-$400 monthly."),
    ("Can I negotiate rent?",
     "Yes. Research comparable units, highlight stable income, offer longer lease or upfront payments."),
    ("How can I lower rental costs?",
     "Get a roommate, search farther from downtown, choose smaller units, time your search for winter months."),
    ("Why get renter's insurance?",
     "Protects your belongings and provides liability coverage. Costs $15-$40/month. "
     "Landlord's policy doesn't cover your stuff."),
    ("Should I pay more for better location?",
     "Calculate total costs. Higher rent near work might save on car, gas, and commute time."),
    ("What if 30% doesn't work in my city?",
     "Get a roommate, move farther out, or increase income with side work."),
]
