"""
Application Layer for the Adaptive Session Engine.

Part of FSE-110: Session start collaborators

This package contains:
- ports/: Collaborator interfaces (what the engine needs)
- use_cases/: Workflows coordinating ports and engine components
- exceptions.py: Engine errors converted to results at the boundary
"""
