"""
Services layer - Business logic goes here.
Keep services focused on specific domains (cases, hotspots, severity, etc.)

DESIGN PRINCIPLE:
- Services contain business logic, NOT routes
- Services take an optional Firestore client and default to the shared one
- Read paths the dashboard can live without degrade to empty results
"""
