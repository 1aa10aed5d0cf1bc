"""Starter catalog: cities and the activities offered in them."""

from decimal import Decimal
from typing import NamedTuple

from backend.app.models.common import Category


class CitySeed(NamedTuple):
    name: str
    country: str
    latitude: float
    longitude: float
    popularity_score: int


class ActivitySeed(NamedTuple):
    name: str
    category: Category
    cost: Decimal
    duration_minutes: int


CITIES: list[CitySeed] = [
    # Europe
    CitySeed("Paris", "France", 48.8566, 2.3522, 95),
    CitySeed("London", "United Kingdom", 51.5074, -0.1278, 94),
    CitySeed("Rome", "Italy", 41.9028, 12.4964, 93),
    CitySeed("Barcelona", "Spain", 41.3851, 2.1734, 92),
    CitySeed("Amsterdam", "Netherlands", 52.3676, 4.9041, 91),
    CitySeed("Berlin", "Germany", 52.5200, 13.4050, 90),
    CitySeed("Prague", "Czech Republic", 50.0755, 14.4378, 89),
    CitySeed("Lisbon", "Portugal", 38.7223, -9.1393, 83),
    # Asia
    CitySeed("Tokyo", "Japan", 35.6762, 139.6503, 98),
    CitySeed("Bangkok", "Thailand", 13.7563, 100.5018, 97),
    CitySeed("Singapore", "Singapore", 1.3521, 103.8198, 96),
    CitySeed("Seoul", "South Korea", 37.5665, 126.9780, 94),
    CitySeed("Dubai", "UAE", 25.2048, 55.2708, 93),
    CitySeed("Kyoto", "Japan", 35.0116, 135.7681, 88),
    # Americas
    CitySeed("New York", "USA", 40.7128, -74.0060, 99),
    CitySeed("San Francisco", "USA", 37.7749, -122.4194, 97),
    CitySeed("Mexico City", "Mexico", 19.4326, -99.1332, 91),
    CitySeed("Rio de Janeiro", "Brazil", -22.9068, -43.1729, 95),
    CitySeed("Buenos Aires", "Argentina", -34.6037, -58.3816, 94),
    # Africa, Middle East and Oceania
    CitySeed("Cairo", "Egypt", 30.0444, 31.2357, 94),
    CitySeed("Cape Town", "South Africa", -33.9249, 18.4241, 92),
    CitySeed("Sydney", "Australia", -33.8688, 151.2093, 96),
    CitySeed("Auckland", "New Zealand", -36.8485, 174.7633, 94),
]

ACTIVITY_TEMPLATES: list[ActivitySeed] = [
    ActivitySeed("Airport Transfer", Category.TRAVEL, Decimal("25"), 60),
    ActivitySeed("Train Journey", Category.TRAVEL, Decimal("50"), 120),
    ActivitySeed("Bus Transfer", Category.TRAVEL, Decimal("15"), 90),
    ActivitySeed("Car Rental", Category.TRAVEL, Decimal("80"), 1440),
    ActivitySeed("Metro Pass", Category.TRAVEL, Decimal("10"), 1440),
    ActivitySeed("Hotel Stay", Category.STAY, Decimal("150"), 1440),
    ActivitySeed("Hostel Stay", Category.STAY, Decimal("40"), 1440),
    ActivitySeed("Airbnb Stay", Category.STAY, Decimal("100"), 1440),
    ActivitySeed("Boutique Hotel", Category.STAY, Decimal("200"), 1440),
    ActivitySeed("Museum Visit", Category.EXPERIENCE, Decimal("20"), 180),
    ActivitySeed("City Walking Tour", Category.EXPERIENCE, Decimal("30"), 180),
    ActivitySeed("Food Tour", Category.EXPERIENCE, Decimal("60"), 240),
    ActivitySeed("Cooking Class", Category.EXPERIENCE, Decimal("70"), 180),
    ActivitySeed("Boat Tour", Category.EXPERIENCE, Decimal("60"), 150),
    ActivitySeed("Hiking Tour", Category.EXPERIENCE, Decimal("40"), 300),
    ActivitySeed("Bike Tour", Category.EXPERIENCE, Decimal("35"), 180),
    ActivitySeed("Local Market Visit", Category.EXPERIENCE, Decimal("30"), 120),
    ActivitySeed("Street Food Tour", Category.EXPERIENCE, Decimal("40"), 180),
    ActivitySeed("Spa Treatment", Category.EXPERIENCE, Decimal("100"), 120),
    ActivitySeed("Rest Day", Category.BUFFER, Decimal("0"), 1440),
    ActivitySeed("Free Time", Category.BUFFER, Decimal("0"), 180),
    ActivitySeed("Flexible Schedule", Category.BUFFER, Decimal("0"), 240),
]

CITY_ACTIVITIES: dict[str, list[ActivitySeed]] = {
    "Paris": [
        ActivitySeed("Eiffel Tower Visit", Category.EXPERIENCE, Decimal("30"), 120),
        ActivitySeed("Louvre Museum", Category.EXPERIENCE, Decimal("20"), 240),
        ActivitySeed("Seine River Cruise", Category.EXPERIENCE, Decimal("50"), 90),
        ActivitySeed("Versailles Palace", Category.EXPERIENCE, Decimal("25"), 240),
    ],
    "London": [
        ActivitySeed("Tower of London", Category.EXPERIENCE, Decimal("35"), 180),
        ActivitySeed("British Museum", Category.EXPERIENCE, Decimal("0"), 240),
        ActivitySeed("London Eye", Category.EXPERIENCE, Decimal("35"), 60),
    ],
    "Tokyo": [
        ActivitySeed("Senso-ji Temple", Category.EXPERIENCE, Decimal("0"), 90),
        ActivitySeed("Tokyo Skytree", Category.EXPERIENCE, Decimal("30"), 120),
        ActivitySeed("Sushi Making Class", Category.EXPERIENCE, Decimal("80"), 180),
    ],
    "New York": [
        ActivitySeed("Statue of Liberty", Category.EXPERIENCE, Decimal("25"), 180),
        ActivitySeed("Broadway Show", Category.EXPERIENCE, Decimal("150"), 180),
        ActivitySeed("Central Park Walk", Category.EXPERIENCE, Decimal("0"), 180),
    ],
    "Rome": [
        ActivitySeed("Colosseum Tour", Category.EXPERIENCE, Decimal("20"), 120),
        ActivitySeed("Vatican Museums", Category.EXPERIENCE, Decimal("20"), 240),
        ActivitySeed("Trevi Fountain", Category.EXPERIENCE, Decimal("0"), 60),
    ],
    "Dubai": [
        ActivitySeed("Burj Khalifa", Category.EXPERIENCE, Decimal("50"), 120),
        ActivitySeed("Desert Safari", Category.EXPERIENCE, Decimal("80"), 360),
    ],
}
