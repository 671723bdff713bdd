"""
Ten Master core Python package.

Pure-logic helpers for the number-matching puzzle, kept apart from the Flask
app and the CLI to simplify testing.
Modules:
- grid.py: Cell, Grid, geometry and rendering helpers
- paths.py: match path resolver
- transforms.py: create, collapse, refill
- session.py: Session value and its transitions
- db.py: SQLite persistence of the live session
- manager.py: coordinator owning the session and its persistence
- hint.py: local hint search and validation of external suggestions
- config.py: GameConfig
"""
