"""
Static content for the public BaseLine Academy pages
"""

ABOUT_STORY = [
    "BaseLine Academy was founded in 2018 with a simple mission: to develop elite basketball "
    "players through scientific training methods and personalized coaching.",
    "What started as small training sessions has grown into one of the most respected basketball "
    "academies in the region.",
    "Today, BaseLine Academy alumni play at collegiate and professional levels across the country.",
]

COACHES = [
    {"name": "Vikram Singh", "role": "Head Coach",
     "bio": "Former national player with 15+ years of coaching experience."},
    {"name": "Ananya Patel", "role": "Skills Development Coach",
     "bio": "Specialized in shooting mechanics and offensive skills."},
    {"name": "Rajiv Sharma", "role": "Strength & Conditioning",
     "bio": "Certified strength coach focused on athlete performance."},
]

PHILOSOPHY = [
    ("Fundamentals First",
     "Every player at BaseLine starts with perfecting the basics."),
    ("Scientific Approach",
     "Training methods backed by sports science and biomechanics."),
    ("Mental Toughness",
     "Players who stay resilient and focused under pressure."),
]

PROGRAM_DETAILS = [
    {
        "id": "3day",
        "title": "3-Day Batch",
        "price": "₹1000",
        "period": "per week",
        "description": "Perfect for players looking to improve their skills while balancing other commitments.",
        "features": [
            "3 training sessions per week (1.5 hours each)",
            "Focus on fundamental skill development",
            "Small group training (max 12 players)",
            "Basic strength and conditioning",
            "Monthly progress reports",
            "Access to training videos and resources",
        ],
        "ideal": "Beginners and intermediate players with limited time",
        "featured": False,
    },
    {
        "id": "5day",
        "title": "5-Day Batch",
        "price": "₹2000",
        "period": "per week",
        "description": "Our most popular program for serious players looking to make significant improvements.",
        "features": [
            "5 training sessions per week (2 hours each)",
            "Comprehensive skill development",
            "Advanced tactical training",
            "Specialized strength and conditioning",
            "Video analysis sessions",
            "Personalized feedback and development plans",
            "Access to practice games and scrimmages",
        ],
        "ideal": "Intermediate to advanced players committed to rapid improvement",
        "featured": True,
    },
    {
        "id": "oneone",
        "title": "One-to-One Coaching",
        "price": "₹3000",
        "period": "per week",
        "description": "Customized training focused entirely on your specific needs and goals.",
        "features": [
            "Private sessions with elite coaches",
            "Fully personalized training program",
            "Detailed performance analysis",
            "Position-specific skill development",
            "Custom strength and conditioning plan",
            "Regular progress evaluations",
        ],
        "ideal": "Players seeking rapid development or specialization",
        "featured": False,
    },
]

# Booking page batches; time slots are keyed "<day>-<time>"
BATCHES = [
    {
        "id": "3day",
        "title": "3-Day Batch",
        "price": "₹1000/week",
        "schedule": [
            {"day": "Monday", "times": ["4:00 PM - 5:30 PM", "6:00 PM - 7:30 PM"]},
            {"day": "Wednesday", "times": ["4:00 PM - 5:30 PM", "6:00 PM - 7:30 PM"]},
            {"day": "Friday", "times": ["4:00 PM - 5:30 PM", "6:00 PM - 7:30 PM"]},
        ],
    },
    {
        "id": "5day",
        "title": "5-Day Batch",
        "price": "₹2000/week",
        "schedule": [
            {"day": day, "times": ["4:00 PM - 6:00 PM", "6:30 PM - 8:30 PM"]}
            for day in ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")
        ],
    },
    {
        "id": "oneone",
        "title": "One-to-One Coaching",
        "price": "₹3000/week",
        "schedule": [
            {"day": "Available all days", "times": ["Schedule according to your availability"]},
        ],
    },
]

EXPERIENCE_LEVELS = {
    "beginner": "Beginner (0-1 years)",
    "intermediate": "Intermediate (1-3 years)",
    "advanced": "Advanced (3-5 years)",
    "expert": "Expert (5+ years)",
}

FAQ = [
    ("How do I know which program is right for me?",
     "We recommend scheduling a free assessment session where our coaches can evaluate your "
     "current skill level and discuss your goals to recommend the best program for you."),
    ("Can I switch between programs?",
     "Yes, you can upgrade or change your program at any time based on your progress and "
     "changing needs. Our coaches will help ensure a smooth transition."),
    ("What equipment do I need to bring?",
     "Just bring your basketball shoes, comfortable athletic wear and a water bottle. We provide "
     "all the necessary training equipment and basketballs."),
    ("Is there an age requirement?",
     "We offer programs for players aged 8 and up, with groups divided by age and skill level."),
]

GALLERY_CAPTIONS = [
    "Training session",
    "Group drills",
    "One-on-one coaching",
    "Shooting practice",
    "Team huddle",
    "Skills competition",
    "Player development",
    "Academy tournament",
    "Strength training",
]

TRAINING_VIDEOS = [
    "Shooting Form Breakdown",
    "Dribbling Masterclass",
    "Basketball IQ Training",
]

# Shown when the API has no completed tournaments yet
PAST_TOURNAMENTS = [
    {
        "title": "Winter Elite Showdown",
        "date": "December 10, 2024",
        "location": "BaseLine Academy Court",
        "description": "The Winter Elite Showdown brought together top talents from the region "
                       "for an intense 5v5 competition.",
        "results": "Team Phoenix - Champions",
    },
    {
        "title": "Fall Basketball Classic",
        "date": "September 25, 2024",
        "location": "City Sports Arena",
        "description": "Our annual Fall Classic featured exciting matches between 20 teams "
                       "across all age groups.",
        "results": "Team Warriors - Champions",
    },
]


def batch_by_id(batch_id):
    for batch in BATCHES:
        if batch["id"] == batch_id:
            return batch
    return None


def time_slots(batch_id):
    """All "<day>-<time>" slot keys offered by a batch"""
    batch = batch_by_id(batch_id)
    if batch is None:
        return []
    return [f"{entry['day']}-{time}" for entry in batch["schedule"] for time in entry["times"]]
