"""Curated Retell voices offered when editing a scenario."""

CURATED_VOICES = [
    {"id": "11labs-Adrian", "name": "Adrian", "gender": "male", "description": "Professional male voice"},
    {"id": "11labs-Myra", "name": "Myra", "gender": "female", "description": "Warm female voice"},
    {"id": "11labs-Dorothy", "name": "Dorothy", "gender": "female", "description": "Elderly female voice"},
    {"id": "11labs-Josh", "name": "Josh", "gender": "male", "description": "Young male voice"},
    {"id": "11labs-Arnold", "name": "Arnold", "gender": "male", "description": "Deep male voice"},
    {"id": "11labs-Charlotte", "name": "Charlotte", "gender": "female", "description": "British female voice"},
    {"id": "11labs-Brian", "name": "Brian", "gender": "male", "description": "American male voice"},
    {"id": "11labs-Lily", "name": "Lily", "gender": "female", "description": "Soft female voice"},
]
