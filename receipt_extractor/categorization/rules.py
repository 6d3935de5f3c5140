"""
Centralized cue tokens, keyword lists and regex patterns for the Categorizer.
"""

import re

from ..models import ExpenseCategory

# Substrings of a normalized merchant key that hint at a category
MERCHANT_CUES = {
    ExpenseCategory.COFFEE: ["coffee", "cafe", "caff", "espresso", "roasters"],
    ExpenseCategory.DINING: ["grill", "bistro", "restaurant", "kitchen", "bar", "pizza", "sushi", "burger", "noodle", "ramen", "taco"],
    ExpenseCategory.GROCERIES: ["market", "grocery", "foods", "supermarket", "produce"],
    ExpenseCategory.FUEL: ["gas", "fuel", "petro", "oil", "station", "charge"],
    ExpenseCategory.TRANSPORT: ["taxi", "cab", "transit", "metro", "bus", "train", "parking", "park"],
    ExpenseCategory.SHOPPING: ["store", "shop", "outlet", "mart", "depot"],
    ExpenseCategory.UTILITIES: ["hydro", "power", "electric", "water", "gas", "internet", "mobile", "cell", "wireless"],
    ExpenseCategory.HOUSING: ["rent", "hoa", "strata", "property", "management", "mortgage"],
    ExpenseCategory.ENTERTAINMENT: ["cinema", "theatre", "theater", "ticket", "concert", "stream", "arcade"],
    ExpenseCategory.TRAVEL: ["air", "hotel", "inn", "hostel", "car rental", "rent a car", "lodge"],
}

# Substrings of the lowercased receipt text, two points per hit (capped at 8)
TEXT_KEYWORDS = {
    ExpenseCategory.COFFEE: ["latte", "espresso", "americano", "cappuccino", "mocha", "macchiato", "frappuccino", "cold brew", "drip", "flat white"],
    ExpenseCategory.DINING: ["tip", "gratuity", "table", "server", "dine in", "takeout"],
    ExpenseCategory.GROCERIES: ["produce", "bakery", "deli", "meat", "seafood", "grocery", "receipt subtotal"],
    ExpenseCategory.FUEL: ["litre", "liter", "gallon", "octane", "diesel", "unleaded", "pump", "kwh"],
    ExpenseCategory.TRANSPORT: ["ride", "trip", "fare", "parking", "toll", "metro", "bus", "train", "ticket"],
    ExpenseCategory.SHOPPING: ["sku", "warranty", "electronics", "apparel", "size", "model"],
    ExpenseCategory.UTILITIES: ["billing period", "account number", "statement", "kwh", "gb", "minutes", "usage", "service address"],
    ExpenseCategory.HOUSING: ["rent", "lease", "unit", "suite", "maintenance", "hoa", "strata", "due date"],
    ExpenseCategory.ENTERTAINMENT: ["ticket", "showtime", "subscription", "pass", "season", "seat", "row"],
    ExpenseCategory.TRAVEL: ["flight", "boarding", "gate", "pnr", "airline", "reservation", "hotel", "room", "check-in", "baggage", "itinerary"],
}

# Airlines, hotels and car rentals pull hard towards travel
TRAVEL_STRONG_MERCHANTS = [
    "air canada", "westjet", "delta", "united", "american airlines", "alaska airlines",
    "marriott", "hilton", "hyatt", "ihg", "hertz", "avis", "budget", "enterprise",
]

COFFEE_DRINKS = [
    "espresso", "latte", "americano", "cappuccino", "mocha", "macchiato",
    "flat white", "frappuccino", "cold brew", "drip",
]

TIP_WORDS = ["tip", "gratuity"]
BILLING_PHRASES = ["billing period", "account number", "statement"]
TRAVEL_PHRASES = ["boarding", "gate ", "flight", "reservation", "check-in", "check in", "baggage"]

FUEL_UNIT_PATTERN = re.compile(r'\b(?:litre|liter|gallon|octane|diesel|unleaded|pump|kwh)\b')
USAGE_UNIT_PATTERN = re.compile(r'\b(?:kwh|gb|min|data)\b')
RIDE_PATTERN = re.compile(r'\b(?:ride|trip|fare|parking|toll|metro|bus|train)\b')
WEIGHT_SKU_PATTERN = re.compile(r'\bkg\b|\blb\b|\bsku\b')

# --- Score weights ---
EXACT_MERCHANT_POINTS = 10
FUZZY_MERCHANT_POINTS = 7
MERCHANT_CUE_POINTS = 4
KEYWORD_POINTS_PER_HIT = 2
KEYWORD_POINTS_CAP = 8
FORMAT_CUE_POINTS = 4
GROCERY_SKU_POINTS = 3
GROCERY_SKU_MIN_LINES = 2
COFFEE_TIEBREAK_POINTS = 2
FUEL_TIEBREAK_POINTS = 1
TRANSPORT_TIEBREAK_POINTS = 1
TRAVEL_BRAND_POINTS = 5

CONFIDENCE_THRESHOLD = 4
LOW_CONFIDENCE_CAP = 3
MAX_CONFIDENCE = 10
