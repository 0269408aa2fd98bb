"""Display labels for classification codes."""

SPORT_LABELS: dict[str, str] = {
    "football": "Football/Soccer",
    "american_football": "American Football",
    "tennis": "Tennis",
    "basketball": "Basketball",
    "baseball": "Baseball/Softball",
    "ice_hockey": "Ice Hockey",
    "cricket": "Cricket",
    "cycling": "Cycling",
    "speed_skating": "Speed Skating",
    "athletics": "Athletics/Running",
    "swimming": "Swimming",
    "rugby": "Rugby",
    "volleyball": "Volleyball",
    "handball": "Handball",
    "esports": "eSports",
    "golf": "Golf",
    "boxing_mma": "Boxing/MMA",
    "motorsport": "Motorsport",
    "skiing": "Skiing",
    "figure_skating": "Figure Skating",
    "gymnastics": "Gymnastics",
    "diving": "Diving",
    "rowing": "Rowing/Canoeing",
    "other": "Other Sport",
    "multi_sport": "Multi-Sport",
}

THEME_LABELS: dict[str, str] = {
    "performance_analysis": "Performance Analysis",
    "injury_prevention": "Injury Prevention",
    "tactical_analysis": "Tactical Analysis",
    "betting_markets": "Betting Markets",
    "player_development": "Player Development",
    "player_valuation": "Player Valuation",
    "transfer_market": "Transfer Market",
    "gender_equity": "Gender Equity",
    "bias_detection": "Bias Detection",
    "data_engineering": "Data Engineering",
    "fan_engagement": "Fan Engagement",
    "coaching": "Coaching",
    "nutrition_recovery": "Nutrition & Recovery",
    "psychology": "Psychology",
    "biomechanics": "Biomechanics",
    "physiology": "Physiology",
    "methodology": "Methodology",
    "epidemiology": "Epidemiology",
    "other": "Other",
}

METHODOLOGY_LABELS: dict[str, str] = {
    "statistical": "Statistical",
    "machine_learning": "Machine Learning",
    "deep_learning": "Deep Learning",
    "NLP": "NLP",
    "computer_vision": "Computer Vision",
    "simulation": "Simulation",
    "optimization": "Optimization",
    "network_analysis": "Network Analysis",
    "qualitative": "Qualitative",
    "mixed_methods": "Mixed Methods",
    "review": "Review",
    "meta_analysis": "Meta-Analysis",
    "descriptive": "Descriptive",
    "other": "Other",
}

CONTENT_TYPE_LABELS: dict[str, str] = {
    "journal_article": "Journal Article",
    "blog_post": "Blog Post",
    "thesis": "Thesis",
    "conference_paper": "Conference Paper",
    "working_paper": "Working Paper",
    "news_article": "News Article",
    "report": "Report",
}

RESOURCE_CATEGORY_LABELS: dict[str, str] = {
    "dataset": "Dataset",
    "scraper": "Scraper",
    "library": "Library",
    "api": "API",
    "tool": "Tool",
}

ACCESS_LABELS: dict[str, str] = {
    "free": "Free",
    "freemium": "Freemium",
    "paid": "Paid",
}

_FACETS: dict[str, dict[str, str]] = {
    "sport": SPORT_LABELS,
    "sports": SPORT_LABELS,
    "theme": THEME_LABELS,
    "methodology": METHODOLOGY_LABELS,
    "content_type": CONTENT_TYPE_LABELS,
    "category": RESOURCE_CATEGORY_LABELS,
    "access": ACCESS_LABELS,
}


def label(facet: str, code: str | None) -> str:
    """Human label for *code* in *facet*; unknown codes are shown as-is."""
    if not code:
        return ""
    return _FACETS.get(facet, {}).get(code, code)
