"""
Services Layer

Pure engine services that:
- Accept domain inputs (constraints, participants, an optional random source)
- Return domain outputs (capacity integers, Match lists)
- Do NOT depend on HTTP request/response objects or database sessions

tournament_service.py is the one exception: it is the persistence host that
stores what the engine produces.
"""
