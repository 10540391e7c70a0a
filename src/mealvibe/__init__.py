"""
MealVibe - mood-aware meal suggestions.

Packages:
- llm: OpenAI client + prompt logging
- services: recommendation, fridge-scan and auth collaborators
- web: FastAPI app (service endpoints + wizard sessions)
- main: typer CLI

The intake wizard itself lives in the sibling `intake` package.
"""

__version__ = "1.0.0"
