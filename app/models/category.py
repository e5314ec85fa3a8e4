# app/models/category.py

COLLECTION = "categories"

# Created by seed_categories.py on first setup
DEFAULT_CATEGORIES = [
    {"name": "Food", "color": None, "icon": "🍔"},
    {"name": "Transport", "color": None, "icon": "🚌"},
    {"name": "Health", "color": None, "icon": "🏥"},
    {"name": "Entertainment", "color": None, "icon": "🎮"},
    {"name": "Home", "color": None, "icon": "🏠"},
    {"name": "Salary", "color": None, "icon": "💰"},
    {"name": "Other", "color": None, "icon": "📌"},
]
