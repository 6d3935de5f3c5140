"""
Canonical merchant seeds by category.

Display names are nice-cased; lookups use their normalized form. Order
matters: when two display names normalize to the same key, the first one
listed keeps the key.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

from ..models import ExpenseCategory

MERCHANT_SEEDS: Mapping[ExpenseCategory, Tuple[str, ...]] = MappingProxyType({
    ExpenseCategory.COFFEE: (
        "Starbucks", "Tim Hortons", "Dunkin", "Blue Bottle", "Philz Coffee",
        "Peet's Coffee", "Blenz Coffee", "JJ Bean", "Caffè Nero",
    ),
    ExpenseCategory.DINING: (
        "McDonald's", "Chipotle", "Subway", "Pizza Hut", "Domino's", "KFC",
        "Five Guys", "Sweetgreen", "Earls", "Cactus Club", "JOEY", "Nando's",
        "Poke", "Sushi",
    ),
    ExpenseCategory.GROCERIES: (
        "Whole Foods", "Safeway", "Trader Joe's", "No Frills", "Loblaws",
        "Real Canadian Superstore", "Save-On-Foods", "IGA",
        "Walmart Supercentre", "Costco Wholesale",
    ),
    ExpenseCategory.FUEL: (
        "Shell", "Chevron", "Petro-Canada", "Esso", "Mobil", "BP", "76",
        "Circle K", "ChargePoint", "EVgo", "Electrify America",
    ),
    ExpenseCategory.TRANSPORT: (
        "Uber", "Lyft", "Yellow Cab", "BC Transit", "TransLink", "Compass",
        "VIA Rail", "Amtrak", "PayByPhone", "ParkMobile", "Zipcar",
    ),
    ExpenseCategory.SHOPPING: (
        "Amazon", "Best Buy", "Walmart", "Target", "Apple Store",
        "Microsoft Store", "IKEA", "Home Depot", "Canadian Tire", "Sport Chek",
        "Sunglass Hut", "Zara", "H&M", "Uniqlo",
    ),
    ExpenseCategory.UTILITIES: (
        "Xfinity", "Comcast", "Verizon", "T-Mobile", "AT&T", "Rogers", "Bell",
        "Telus", "Shaw", "Hydro One", "BC Hydro", "FortisBC", "Enbridge",
    ),
    ExpenseCategory.HOUSING: (
        "Airbnb", "HOA", "Strata", "Property Management", "Landlord",
        "Rent Payment", "Mortgage",
    ),
    ExpenseCategory.ENTERTAINMENT: (
        "AMC", "Cinemark", "Cineplex", "Ticketmaster", "StubHub", "Netflix",
        "Spotify", "Disney", "PlayStation", "Xbox", "Steam",
    ),
    ExpenseCategory.TRAVEL: (
        "Delta", "United", "Air Canada", "WestJet", "Alaska Airlines",
        "American Airlines", "Marriott", "Hilton", "Hyatt", "IHG", "Hertz",
        "Avis", "Budget", "Enterprise",
    ),
    ExpenseCategory.PERSONAL: (),
    ExpenseCategory.INCOME: (),
    ExpenseCategory.OTHER: (),
})
