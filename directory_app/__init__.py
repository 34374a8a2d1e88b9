"""
Hackathon participant directory.

Usage (development):
    python -m uvicorn directory_app.main:app --reload
"""
