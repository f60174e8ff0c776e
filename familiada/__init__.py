"""
Familiada - Game Show Host Engine

A deterministic engine for running the Familiada (Family Feud) game show.
The engine loads a question dataset and provides:
- Round state machine (reveals, errors, steals)
- Scoring with round multipliers
- Team turn rotation
- Full-state undo
- Effect descriptors for presentation and audio collaborators
"""

__version__ = "0.1.0"
